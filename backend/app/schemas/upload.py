from pydantic import BaseModel


class UploadedUrl(BaseModel):
    url: str


class UploadedUrls(BaseModel):
    urls: list[str]


class UploadedFile(BaseModel):
    url: str
    path: str
