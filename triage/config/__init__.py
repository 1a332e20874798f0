from .settings import TriageSettings, settings

__all__ = ["TriageSettings", "settings"]
