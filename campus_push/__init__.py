from .handlers import MessageNotifier, Outcome, RequestNotifier

__all__ = ['MessageNotifier', 'Outcome', 'RequestNotifier']
