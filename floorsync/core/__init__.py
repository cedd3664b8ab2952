"""核心业务逻辑

工单状态机、停机告警、看板统计与事件广播
"""
