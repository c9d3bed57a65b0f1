from sqlbridge.utils.decorators import traced

__all__ = ["traced"]
