"""日志与配置读取工具。"""
