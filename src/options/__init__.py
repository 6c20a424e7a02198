"""
Options — Generic контейнер опционального значения

Option[T] явно различает present / absent и прозрачно интегрируется с
границами сериализации:
- JSON (pydantic): absent ↔ null, present(v) ↔ представление v
- SQL (SQLAlchemy / DB-API): absent ↔ NULL, чтение с конверсией и сужением до T
- Тесты: глубокое структурное равенство и pytest hook для диффов
"""

import logging

from .converters import (
    DEFAULT_PARAMETER_CONVERTER,
    NATIVE_TYPES,
    ParameterConverter,
)
from .equality import deep_equal, iter_differences
from .errors import (
    OptionConversionError,
    OptionDecodeError,
    OptionEncodeError,
    OptionError,
    OptionTypeMismatchError,
    UnwrapAbsentError,
)
from .json_codec import JsonCodecConfig
from .option import (
    Option,
    absent,
    equal,
    from_optional,
    from_pair,
    map_option,
    pointer,
    present,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Option
    "Option",
    "present",
    "absent",
    "from_optional",
    "from_pair",
    "map_option",
    "equal",
    "pointer",
    # Equality
    "deep_equal",
    "iter_differences",
    # JSON
    "JsonCodecConfig",
    # SQL
    "ParameterConverter",
    "DEFAULT_PARAMETER_CONVERTER",
    "NATIVE_TYPES",
    # Errors
    "OptionError",
    "OptionDecodeError",
    "OptionEncodeError",
    "OptionConversionError",
    "OptionTypeMismatchError",
    "UnwrapAbsentError",
]
