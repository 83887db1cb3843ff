from prodrec.util.di.base import Provider
from prodrec.util.di.scope import Scope

__all__ = ["Provider", "Scope"]
