from marketplace.schemas.common import ResponseModel


class UploadFileResponse(ResponseModel):
    filename: str
    url: str
    size: int
    mimetype: str
