import unittest

from swift_registry.errors import ValidationError
from swift_registry.validation import (
    is_headquarter_code,
    is_valid_country_iso2,
    is_valid_swift_code,
    validate_code_input,
)


def _payload(**overrides):
    data = {
        "swiftCode": "POSTTESTXXX",
        "bankName": "Post Test Bank",
        "address": "1 Rue de Test",
        "countryISO2": "FR",
        "countryName": "France",
        "isHeadquarter": True,
    }
    data.update(overrides)
    return data


class TestCodeFormat(unittest.TestCase):
    def test_valid_codes(self):
        for code in ("BANKUSNY", "BANKUSNYXXX", "BANKUS33", "BANKUSNY12A"):
            self.assertTrue(is_valid_swift_code(code), code)

    def test_invalid_codes(self):
        for code in ("BANKUSN", "BANKUSNY1", "BANKUSNY1234", "B4NKUSNYXXX", "BANK1SNYXXX", "bankusnyxxx", ""):
            self.assertFalse(is_valid_swift_code(code), code)

    def test_country_iso2(self):
        self.assertTrue(is_valid_country_iso2("US"))
        self.assertFalse(is_valid_country_iso2("U1"))
        self.assertFalse(is_valid_country_iso2("USA"))
        self.assertFalse(is_valid_country_iso2("us"))

    def test_headquarter_suffix(self):
        self.assertTrue(is_headquarter_code("BANKUSNYXXX"))
        self.assertFalse(is_headquarter_code("BANKUSNY123"))


class TestValidateCodeInput(unittest.TestCase):
    def test_normalizes_casing_and_whitespace(self):
        rec = validate_code_input(_payload(swiftCode="  posttestxxx ", countryISO2=" fr", countryName="france"))
        self.assertEqual(rec.code, "POSTTESTXXX")
        self.assertEqual(rec.country_iso2, "FR")
        self.assertEqual(rec.country_name, "FRANCE")
        self.assertEqual(rec.headquarter_group_key, "POSTTEST")
        self.assertTrue(rec.is_headquarter)

    def test_address_defaults_to_empty(self):
        data = _payload()
        del data["address"]
        self.assertEqual(validate_code_input(data).address, "")
        self.assertEqual(validate_code_input(_payload(address=None)).address, "")

    def test_headquarter_flag_taken_as_supplied(self):
        rec = validate_code_input(_payload(swiftCode="POSTTEST123", isHeadquarter=True))
        self.assertTrue(rec.is_headquarter)
        rec2 = validate_code_input(_payload(swiftCode="POSTTESTXXX", isHeadquarter=False))
        self.assertFalse(rec2.is_headquarter)

    def test_reports_every_violation(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_code_input({
                "swiftCode": "BAD",
                "bankName": "",
                "countryISO2": "FRA",
                "isHeadquarter": "yes",
            })
        fields = {d["field"] for d in ctx.exception.details}
        self.assertEqual(fields, {"swiftCode", "bankName", "countryISO2", "countryName", "isHeadquarter"})
        self.assertEqual(ctx.exception.status, 400)

    def test_missing_everything(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_code_input({})
        fields = [d["field"] for d in ctx.exception.details]
        for f in ("swiftCode", "bankName", "countryISO2", "countryName", "isHeadquarter"):
            self.assertIn(f, fields)
        self.assertNotIn("address", fields)

    def test_non_string_fields_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_code_input(_payload(swiftCode=12345678, address=7))
        fields = [d["field"] for d in ctx.exception.details]
        self.assertIn("swiftCode", fields)
        self.assertIn("address", fields)

    def test_whitespace_only_names_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_code_input(_payload(bankName="   ", countryName=" "))
        fields = [d["field"] for d in ctx.exception.details]
        self.assertEqual(sorted(fields), ["bankName", "countryName"])

    def test_trailing_newline_rejected(self):
        self.assertFalse(is_valid_swift_code("BANKUSNYXXX\n"))
        self.assertFalse(is_valid_country_iso2("US\n"))

    def test_non_ascii_not_widened_by_upper_casing(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_code_input(_payload(swiftCode="bankusny\u00dfx", countryISO2="\u00df"))
        fields = {d["field"] for d in ctx.exception.details}
        self.assertEqual(fields, {"swiftCode", "countryISO2"})


if __name__ == "__main__":
    unittest.main()
