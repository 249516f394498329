from .client import ApiResponse, StraicoClient

__all__ = ["ApiResponse", "StraicoClient"]
