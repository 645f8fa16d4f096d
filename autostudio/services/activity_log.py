"""
AutoStudio - Activity Log
Bounded in-memory feed of user-visible events, newest first
"""
import logging
import threading
from collections import deque
from datetime import datetime
from typing import List, Dict

logger = logging.getLogger(__name__)


class ActivityLog:
    """Activity feed shown on the dashboard; also mirrored to the application log"""

    TYPE_INFO = 'info'
    TYPE_SUCCESS = 'success'
    TYPE_ERROR = 'error'

    TYPES = (TYPE_INFO, TYPE_SUCCESS, TYPE_ERROR)

    def __init__(self, max_entries: int = 200):
        self._entries = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def log(self, msg: str, type: str = TYPE_INFO) -> Dict[str, str]:
        if type not in self.TYPES:
            type = self.TYPE_INFO
        entry = {
            'msg': msg,
            'type': type,
            'time': datetime.now().strftime('%H:%M:%S')
        }
        with self._lock:
            self._entries.appendleft(entry)

        if type == self.TYPE_ERROR:
            logger.error(msg)
        else:
            logger.info(msg)
        return entry

    def info(self, msg: str) -> Dict[str, str]:
        return self.log(msg, self.TYPE_INFO)

    def success(self, msg: str) -> Dict[str, str]:
        return self.log(msg, self.TYPE_SUCCESS)

    def error(self, msg: str) -> Dict[str, str]:
        return self.log(msg, self.TYPE_ERROR)

    def entries(self, limit: int = None) -> List[Dict[str, str]]:
        with self._lock:
            items = list(self._entries)
        return items[:limit] if limit else items

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
