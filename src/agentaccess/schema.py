# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Wire Schema Base

Interchange documents (credentials, requests, results, policies) use
camelCase JSON. Python code uses snake_case; both spellings parse.
"""

import time
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)


class WireModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
