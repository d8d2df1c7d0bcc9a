from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class PixCharge(BaseModel):
    """A validated request for a PIX code.

    The payload encoder accepts anything; this model is the place where a
    charge is checked before it reaches it.
    """

    pix_key: str
    merchant_name: str
    merchant_city: str
    amount: Decimal = Field(ge=0)

    @field_validator("pix_key", "merchant_name", "merchant_city")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class PixCode(BaseModel):
    payload: str
    qrcode_png: bytes

    @property
    def crc(self) -> str:
        return self.payload[-4:]
