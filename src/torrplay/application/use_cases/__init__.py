from .play import PlayTarget, PlayUseCase

__all__ = ["PlayTarget", "PlayUseCase"]
