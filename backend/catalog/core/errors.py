from typing import Any, Dict, List, Mapping


class CatalogError(Exception):
    """
    Base class for errors that map directly onto an HTTP response.

    The response body is {"message": ...} plus whatever `extra` holds.
    """

    status_code: int = 400

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra: Dict[str, Any] = extra

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, **self.extra}


class InvalidParameter(CatalogError):
    status_code = 400


class ValidationError(CatalogError):
    status_code = 400


class MissingFields(ValidationError):
    def __init__(self, missing_fields: List[str]) -> None:
        super().__init__("Missing required fields", missingFields=list(missing_fields))
        self.missing_fields = list(missing_fields)


class InvalidCuisine(ValidationError):
    def __init__(self, valid_cuisines: Mapping[int, str]) -> None:
        super().__init__(
            "'cuisine' must be an integer between 1 and 11, corresponding to a valid cuisine.",
            validCuisines={str(k): v for k, v in valid_cuisines.items()},
        )


class NoUpdateData(CatalogError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("There is no data to update.")


class NotFound(CatalogError):
    status_code = 404


class InternalError(CatalogError):
    status_code = 500

    def __init__(self, message: str, error: BaseException | None = None) -> None:
        super().__init__(message, error=str(error) if error is not None else None)
