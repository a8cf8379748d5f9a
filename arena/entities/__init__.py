from .unit import DEFAULT_ATTACK_POWER, DEFAULT_HIT_POINTS, Unit

__all__ = ["Unit", "DEFAULT_HIT_POINTS", "DEFAULT_ATTACK_POWER"]
