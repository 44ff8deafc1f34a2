from .auth_exceptions import AuthExceptionCode

__all__ = ["AuthExceptionCode"]
