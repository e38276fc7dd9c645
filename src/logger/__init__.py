from .logging_module import CustomFormatter, LoggingModule

__all__ = [
    'CustomFormatter',
    'LoggingModule',
]
