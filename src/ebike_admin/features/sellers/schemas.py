from pydantic import BaseModel

from ..auth.models import UserStatus


class SellerStatusUpdate(BaseModel):
    status: UserStatus
