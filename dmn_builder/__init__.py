"""Top-level package for the DMN builder.

Front-ends (CLI, services, other tools) should only depend on the public API
exposed here rather than importing internal modules directly.
"""

from .core.generators import construct_dmn_xml  # re-export for convenience
from .core.models import ParamDef
from .core.utils import escape_xml

__all__: list[str] = [
    "construct_dmn_xml",
    "escape_xml",
    "ParamDef",
]
