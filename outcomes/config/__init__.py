from .settings import OutcomeSettings, settings

__all__ = ["OutcomeSettings", "settings"]
