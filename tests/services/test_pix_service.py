from decimal import Decimal
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from supermix.pix import crc16
from supermix.services.pix_service import PixConfigurationError, PixService
from supermix.settings import Settings


def _settings(**overrides) -> Settings:
    defaults = dict(
        pix_key="financeiro@supermix.com.br",
        pix_merchant_name="Supermix Concreto",
        pix_merchant_city="Barueri",
        qrcode_box_size=4,
        qrcode_border=1,
    )
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


class TestIsConfigured:
    def test_complete(self):
        assert PixService(_settings()).is_configured() is True

    @pytest.mark.parametrize("field", ["pix_key", "pix_merchant_name", "pix_merchant_city"])
    def test_missing_field(self, field):
        assert PixService(_settings(**{field: ""})).is_configured() is False

    def test_blank_field(self):
        assert PixService(_settings(pix_merchant_city="   ")).is_configured() is False

    def test_defaults_to_global_settings(self):
        with patch("supermix.services.pix_service.settings", _settings()):
            service = PixService()
        assert service.config.pix_key == "financeiro@supermix.com.br"


class TestCreateCharge:
    def test_uses_configuration(self):
        charge = PixService(_settings()).create_charge(150)
        assert charge.pix_key == "financeiro@supermix.com.br"
        assert charge.merchant_name == "Supermix Concreto"
        assert charge.merchant_city == "Barueri"
        assert charge.amount == Decimal("150")

    def test_overrides_take_precedence(self):
        charge = PixService(_settings()).create_charge(
            10, pix_key="11987654321", merchant_name="Filial", merchant_city="Osasco"
        )
        assert charge.pix_key == "11987654321"
        assert charge.merchant_name == "Filial"
        assert charge.merchant_city == "Osasco"

    def test_override_fills_missing_configuration(self):
        charge = PixService(_settings(pix_key="")).create_charge(10, pix_key="key@pix")
        assert charge.pix_key == "key@pix"

    def test_incomplete_configuration(self):
        service = PixService(_settings(pix_key="", pix_merchant_city=""))
        with pytest.raises(PixConfigurationError, match="pix_key, merchant_city"):
            service.create_charge(10)

    def test_configuration_error_is_value_error(self):
        assert issubclass(PixConfigurationError, ValueError)

    def test_negative_amount(self):
        with pytest.raises(ValidationError):
            PixService(_settings()).create_charge(-10)


class TestGenerate:
    def test_payload_and_png(self):
        service = PixService(_settings())
        code = service.generate(service.create_charge(Decimal("1500.50")))
        assert code.payload.startswith("000201010212")
        assert "54071500.50" in code.payload
        assert "5917SUPERMIX CONCRETO" in code.payload
        assert "6007BARUERI" in code.payload
        assert crc16(code.payload[:-4]) == code.crc
        assert code.qrcode_png[:4] == b"\x89PNG"

    def test_uses_configured_qrcode_size(self):
        service = PixService(_settings(qrcode_box_size=7, qrcode_border=3))
        with patch("supermix.services.pix_service.generate_pix_qrcode_png", return_value=b"png") as mock_png:
            code = service.generate(service.create_charge(10))
        mock_png.assert_called_once_with(code.payload, box_size=7, border=3)
        assert code.qrcode_png == b"png"

    def test_logs_payload_details_at_debug(self, caplog):
        service = PixService(_settings())
        with caplog.at_level("DEBUG", logger="supermix.services.pix_service"):
            code = service.generate(service.create_charge(10, pix_key="11987654321"))
        debug = [
            r.getMessage()
            for r in caplog.records
            if r.name == "supermix.services.pix_service" and r.levelname == "DEBUG"
        ]
        assert debug == [
            f"Built PIX payload key=+5511987654321 name='SUPERMIX CONCRETO' city='BARUERI' "
            f"length={len(code.payload)} crc={code.crc}"
        ]

    def test_logs_generation(self, caplog):
        service = PixService(_settings())
        with caplog.at_level("INFO", logger="supermix.services.pix_service"):
            code = service.generate(service.create_charge(10))
        assert f"crc={code.crc}" in caplog.text

    def test_generate_for_amount(self):
        code = PixService(_settings()).generate_for_amount(0, pix_key="11987654321")
        assert "0114+5511987654321" in code.payload
        assert "54040.00" in code.payload

    def test_generate_for_amount_incomplete(self):
        with pytest.raises(PixConfigurationError):
            PixService(_settings(pix_merchant_name="")).generate_for_amount(10)
