from dishka import Provider as DishkaProvider

from prodrec.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all prodrec providers. Defaults to the UOW scope."""

    scope = Scope.UOW
