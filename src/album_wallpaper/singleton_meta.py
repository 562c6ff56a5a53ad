import threading


class SingletonMeta(type):
    _instances: dict = {}
    # Reentrant: a singleton may construct another one in its __init__
    _lock = threading.RLock()

    def __call__(cls, *args, **kwargs):
        with cls._lock:
            if cls not in cls._instances:
                cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]

    @classmethod
    def reset(mcs) -> None:
        """Forget every instance; the next call builds a fresh one."""
        with mcs._lock:
            mcs._instances.clear()
