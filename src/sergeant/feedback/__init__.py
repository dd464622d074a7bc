from .base_feedback import BaseFeedback, SilentFeedback
from .session_log import LogEntry, SessionLog

__all__ = ['BaseFeedback', 'SilentFeedback', 'LogEntry', 'SessionLog']
