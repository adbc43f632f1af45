"""taskboard：任务增删改查服务 + 控制台客户端"""
