"""Guest checkout form models"""

from pydantic import BaseModel
from typing import Optional


class GuestForm(BaseModel):
    """Contact and address details entered on the guest checkout page"""
    # Contact
    name: str = ""
    email: str = ""
    phone: str = ""
    referral_code: str = ""
    # Address
    address: str = ""
    city: str = ""
    province: str = ""
    zip: str = ""


class GuestFormUpdate(BaseModel):
    """Partial update of guest form fields"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    referral_code: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    zip: Optional[str] = None


class Identity(BaseModel):
    """Signed-in shopper identity from the auth provider"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    access_token: Optional[str] = None


FormErrors = dict[str, str]
