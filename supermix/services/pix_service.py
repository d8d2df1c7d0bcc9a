from __future__ import annotations

import logging
from decimal import Decimal

from supermix.models.pix import PixCharge, PixCode
from supermix.pix import (
    MERCHANT_CITY_MAX_LENGTH,
    MERCHANT_NAME_MAX_LENGTH,
    build_pix_payload,
    normalize_pix_key,
    normalize_text,
)
from supermix.qrcode import generate_pix_qrcode_png
from supermix.settings import Settings, settings

logger = logging.getLogger(__name__)


class PixConfigurationError(ValueError):
    """Raised when the PIX key, merchant name or merchant city is missing."""


class PixService:
    def __init__(self, config: Settings | None = None) -> None:
        self.config = config if config is not None else settings

    def _resolve(
        self,
        pix_key: str | None = None,
        merchant_name: str | None = None,
        merchant_city: str | None = None,
    ) -> tuple[str, str, str]:
        return (
            pix_key or self.config.pix_key,
            merchant_name or self.config.pix_merchant_name,
            merchant_city or self.config.pix_merchant_city,
        )

    def is_configured(self) -> bool:
        return all(value.strip() for value in self._resolve())

    def create_charge(
        self,
        amount: Decimal | float | int,
        *,
        pix_key: str | None = None,
        merchant_name: str | None = None,
        merchant_city: str | None = None,
    ) -> PixCharge:
        key, name, city = self._resolve(pix_key, merchant_name, merchant_city)
        missing = [
            label
            for label, value in (("pix_key", key), ("merchant_name", name), ("merchant_city", city))
            if not value.strip()
        ]
        if missing:
            raise PixConfigurationError(f"PIX configuration incomplete: missing {', '.join(missing)}")
        return PixCharge(pix_key=key, merchant_name=name, merchant_city=city, amount=amount)

    def generate(self, charge: PixCharge) -> PixCode:
        payload = build_pix_payload(
            charge.pix_key,
            charge.merchant_name,
            charge.merchant_city,
            charge.amount,
        )
        logger.debug(
            "Built PIX payload key=%s name=%r city=%r length=%d crc=%s",
            normalize_pix_key(charge.pix_key),
            normalize_text(charge.merchant_name, MERCHANT_NAME_MAX_LENGTH),
            normalize_text(charge.merchant_city, MERCHANT_CITY_MAX_LENGTH),
            len(payload),
            payload[-4:],
        )
        png = generate_pix_qrcode_png(
            payload,
            box_size=self.config.qrcode_box_size,
            border=self.config.qrcode_border,
        )
        code = PixCode(payload=payload, qrcode_png=png)
        logger.info("Generated PIX code amount=%s crc=%s", charge.amount, code.crc)
        return code

    def generate_for_amount(
        self,
        amount: Decimal | float | int,
        *,
        pix_key: str | None = None,
        merchant_name: str | None = None,
        merchant_city: str | None = None,
    ) -> PixCode:
        charge = self.create_charge(
            amount,
            pix_key=pix_key,
            merchant_name=merchant_name,
            merchant_city=merchant_city,
        )
        return self.generate(charge)
