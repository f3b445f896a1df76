from marketplace.schemas.common import ResponseModel


class MasterCountsResponse(ResponseModel):
    categories: int
    subcategories: int
    brands: int
    products: int
