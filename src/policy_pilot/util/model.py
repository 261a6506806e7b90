import pydantic
import pydantic_core

__all__ = ("convert_errors",)


CUSTOM_TYPES = {
    "dict_type": "mapping_type",
    "model_attributes_type": "mapping_type",
    "union_tag_invalid": "enum_value_out_of_range",
    "union_tag_not_found": "missing",
    "unexpected_keyword_argument": "extra_field",
    "extra_forbidden": "extra_field",
}
CUSTOM_MESSAGES = {
    # https://docs.pydantic.dev/latest/errors/validation_errors/#model_type
    "extra_field": "Extra fields not allowed",
    "missing": "Field is required",
    "enum_value_out_of_range": (
        "Input must be set to one of the following values: {expected_tags}"
    ),
    "mapping_type": "Input must be a valid mapping",
    "greater_than_equal": "Input must be greater than or equal to {ge}",
    "less_than_equal": "Input must be less than or equal to {le}",
}


def convert_errors(
    ex: pydantic.ValidationError,
    custom_messages: dict[str, str] = CUSTOM_MESSAGES,
    custom_types: dict[str, str] = CUSTOM_TYPES,
) -> list[pydantic_core.ErrorDetails]:
    new_errors: list[pydantic_core.ErrorDetails] = []

    for error in ex.errors(include_url=False):
        ctx = error.get("ctx")

        # Ensure valid locations for tagged unions in Pydantic validation errors

        # 'loc': ('auth', 'api-key', 'secret'), => ('auth', 'secret'),
        if len(error["loc"]) > 2 and error["loc"][0:2] in (
            ("auth", "api-key"),
            ("auth", "token"),
        ):
            error["loc"] = (error["loc"][0], *error["loc"][2:])
        # 'loc': ('auth',), => ('auth', 'method'),
        if error["type"] in ("union_tag_not_found", "union_tag_invalid"):
            error["loc"] += (ctx["discriminator"].replace("'", ""),)  # type: ignore[index]

        if custom_type := custom_types.get(error["type"]):
            error["type"] = custom_type

        if custom_message := custom_messages.get(error["type"]):
            error["msg"] = custom_message.format(**ctx) if ctx else custom_message

        if ctx:
            # we don't want to show the context to the user
            del error["ctx"]

        new_errors.append(error)

    return new_errors
