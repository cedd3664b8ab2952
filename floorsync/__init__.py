"""车间工单跟踪

工单状态机、停机告警、看板统计，以及向所有在线观察者的实时推送
"""

__version__ = "1.0.0"
