"""
Contract test utilities.

Contract tests validate API response shapes so that breaking changes to the
preview, delete and duplicate payloads are caught.
"""

from typing import Any, Dict, Type, Union


def assert_response_shape(
    response_data: Any,
    expected_fields: Dict[str, Union[Type, tuple]],
    *,
    allow_extra: bool = True,
    path: str = "",
) -> None:
    """
    Assert that response data matches expected field types.

    Args:
        response_data: The response data to validate
        expected_fields: Dict mapping field names to expected types
        allow_extra: Whether to allow fields not in expected_fields
        path: Current path for error messages

    Raises:
        AssertionError: If response doesn't match expected shape
    """
    if not isinstance(response_data, dict):
        raise AssertionError(
            f"Expected dict at {path or 'root'}, got {type(response_data).__name__}"
        )

    for field, expected_type in expected_fields.items():
        field_path = f"{path}.{field}" if path else field
        if field not in response_data:
            raise AssertionError(f"Missing required field: {field_path}")

        value = response_data[field]
        if value is None:
            if isinstance(expected_type, tuple) and type(None) in expected_type:
                continue
            raise AssertionError(f"Field {field_path} is None but expected {expected_type}")

        # bool is an int subclass; never accept it for a count
        if expected_type is int and isinstance(value, bool):
            raise AssertionError(f"Field {field_path}: expected int, got bool")
        if not isinstance(value, expected_type):
            raise AssertionError(
                f"Field {field_path}: expected {expected_type}, got {type(value).__name__}"
            )

    if not allow_extra:
        extra_fields = set(response_data.keys()) - set(expected_fields.keys())
        if extra_fields:
            raise AssertionError(f"Unexpected fields at {path or 'root'}: {extra_fields}")


def assert_error_response(response_data: Any, detail_type: Type = str) -> None:
    """
    Assert that response is a valid error response.

    Args:
        response_data: The response data to validate
        detail_type: str for plain errors, dict for commit failures
    """
    assert_response_shape(response_data, {"detail": detail_type})
