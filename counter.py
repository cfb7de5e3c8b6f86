import threading


class PacketCounter:
    """Monotonic packet counter shared between the receive and report paths"""

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def get(self) -> int:
        with self._lock:
            return self._value

    def __int__(self):
        return self.get()

    def __repr__(self):
        return f'PacketCounter({self.get()})'
