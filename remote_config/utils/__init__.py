"""
Utility Module.

Type predicates and date-format helpers shared by the models and the
REST client.
"""

from remote_config.utils import validator

__all__ = ["validator"]
