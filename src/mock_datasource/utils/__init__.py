from .errors import Err, MockDataError

__all__ = ["Err", "MockDataError"]
