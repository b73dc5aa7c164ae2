from .sweet_models import Sweet

__all__ = ["Sweet"]
