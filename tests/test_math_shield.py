"""
公式保护测试
"""

import re

import pytest

from markframe.domain.errors import ShieldMismatchError
from markframe.infrastructure.converter import math_shield
from markframe.infrastructure.converter.math_shield import MathShield
from markframe.types import ShieldKind

SCENARIO = "Inline $a^2+b^2=c^2$ and $$\\int_0^1 x dx$$"


def test_block_math_is_shielded_before_inline():
    protected, table = MathShield().shield(SCENARIO)

    assert len(table) == 2
    assert table[0].kind is ShieldKind.BLOCK
    assert table[0].source == "$$\\int_0^1 x dx$$"
    assert table[1].kind is ShieldKind.INLINE
    assert table[1].source == "$a^2+b^2=c^2$"
    assert "$" not in protected


def test_placeholders_are_alphanumeric():
    protected, table = MathShield().shield(SCENARIO)
    token = table.token(ShieldKind.INLINE, 1)

    assert token in protected
    assert re.fullmatch(r"[A-Za-z0-9]+", token)


def test_unshield_restores_text_verbatim():
    shield = MathShield()
    protected, table = shield.shield(SCENARIO)

    assert shield.unshield(protected, table) == SCENARIO


def test_text_without_math_is_unchanged():
    protected, table = MathShield().shield("costs $5 today")

    assert len(table) == 0
    assert protected == "costs $5 today"


def test_nonce_never_collides_with_user_text(monkeypatch):
    class FakeUUID:
        def __init__(self, value):
            self.hex = value

    nonces = iter([FakeUUID("a" * 32), FakeUUID("b" * 32)])
    monkeypatch.setattr(math_shield.uuid, "uuid4", lambda: next(nonces))

    text = "literal MFSHIELDaaaaaaaaaaaaINLINE0END and $x$"
    shield = MathShield()
    protected, table = shield.shield(text)

    assert table.nonce == "b" * 12
    assert shield.unshield(protected, table) == text


def test_unknown_index_raises():
    shield = MathShield()
    _, table = shield.shield("$x$")

    with pytest.raises(ShieldMismatchError):
        shield.unshield(table.token(ShieldKind.INLINE, 5), table)


def test_kind_mismatch_raises():
    shield = MathShield()
    _, table = shield.shield("$$x$$")

    with pytest.raises(ShieldMismatchError):
        shield.unshield(table.token(ShieldKind.INLINE, 0), table)
