from typing import Any, Dict, Optional, Type, TypeVar

from fastapi import UploadFile

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from coursehub.core.exceptions import ValidationError
from coursehub.services.storage import IncomingFile

SchemaType = TypeVar("SchemaType", bound=BaseModel)


def parse_form(schema: Type[SchemaType], data: Dict[str, Any]) -> SchemaType:
    """Validates multipart form fields the way JSON bodies are validated, but as a 400."""
    values = {key: value for key, value in data.items() if value is not None}
    try:
        return schema.model_validate(values)
    except PydanticValidationError as e:
        errors = [
            {"field": ".".join(str(loc) for loc in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationError("Invalid form data.", details={"errors": errors})


def read_upload(upload: Optional[UploadFile]) -> Optional[IncomingFile]:
    """Reads a multipart file part; an absent or empty part yields ``None``."""
    if upload is None or not upload.filename:
        return None
    return IncomingFile(
        filename=upload.filename,
        content_type=upload.content_type,
        content=upload.file.read(),
    )
