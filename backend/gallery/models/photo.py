"""Photo inventory record, one per image file under the photo root."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PhotoRecord(BaseModel):
    src: str = Field(..., description="Public URL path, e.g. /photos/Art/Analog%20photography/x.jpg")
    directory: str = Field(default="", description="Directory relative to the photo root")
    folder: str = Field(default="Photos", description="Last directory component")
    order: int = Field(default=1, description="1-based index within its directory, by file name")
    file: str = Field(..., description="File name only")
    width: int | None = Field(default=None, description="Pixel width, orientation applied")
    height: int | None = Field(default=None, description="Pixel height, orientation applied")

    @property
    def aspect_ratio(self) -> float | None:
        if self.width and self.height and self.width > 0 and self.height > 0:
            return self.width / self.height
        return None
