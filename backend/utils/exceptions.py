# backend/utils/exceptions.py
# Domain errors raised by the services. main.py maps them to HTTP responses.


class ResourceNotFoundException(Exception):
    """An entity looked up by key does not exist (HTTP 404)."""

    def __init__(self, resource_name: str, field_name: str, field_value):
        self.resource_name = resource_name
        self.field_name = field_name
        self.field_value = field_value
        super().__init__(f"{resource_name} not found with {field_name}: {field_value}")


class APIException(Exception):
    """A business rule rejected the request (HTTP 400)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
