"""Common annotated types for field validation."""

from typing import Annotated

from pydantic import Field

# File identifier - opaque, only required to be non-empty
FileId = Annotated[str, Field(min_length=1)]

# Name of a file selected for upload
UploadName = Annotated[str, Field(min_length=1)]

# Host part of a page location, including a non-default port
Host = Annotated[str, Field(min_length=1)]

# URL scheme, lowercase without the trailing colon
Scheme = Annotated[str, Field(min_length=1, pattern=r"^[a-z][a-z0-9+.-]*$")]
