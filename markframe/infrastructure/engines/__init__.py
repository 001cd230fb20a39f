"""
基础设施层 - 能力引擎
各模块在导入时加载重量级依赖，由能力注册表在后台线程中按需导入
"""
