from .errors import (  # noqa
    ApiError,
    BadRequestError,
    CommonError,
    ConfigError,
    NotFoundError,
    SneakerCollectionError,
    UnauthorizedError,
)
from .models import (  # noqa
    KEY_FIELDS,
    AbstractRepository,
    Entity,
    QueryParameters,
)
