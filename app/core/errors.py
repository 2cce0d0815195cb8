from typing import List

from fastapi import HTTPException


class ValidationError(HTTPException):
    """Quiz content broke one or more authoring rules. The input stays editable."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(status_code=400, detail={"errors": self.errors})


class NotFoundError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)


class InvalidInputError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=422, detail=detail)
