from typing import Annotated

import annotated_types
from typing_extensions import TypedDict

CharClassMin = Annotated[int, annotated_types.Ge(0), annotated_types.Le(32)]


class LengthMixin(TypedDict):
    length_min: Annotated[int, annotated_types.Ge(8), annotated_types.Le(128)]
    length_max: Annotated[int, annotated_types.Ge(8), annotated_types.Le(128)]
