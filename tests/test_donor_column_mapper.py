from __future__ import annotations

import unittest

from app.mappers.donor_column_mapper import DonorColumnMapper, normalize_header
from app.validators.mapping_validator import ColumnMappingError, MappingValidator


class TestDonorColumnMapper(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = DonorColumnMapper()

    def test_normalize_header_strips_punctuation_and_case(self) -> None:
        self.assertEqual(normalize_header("  E-mail Address "), "emailaddress")
        self.assertEqual(normalize_header("First_Name"), "firstname")

    def test_resolves_exact_and_alias_headers(self) -> None:
        resolution = self.mapper.resolve(
            ["Email Address", "First Name", "Last Name", "Phone Number", "Donation Amount", "Donation Date", "Gift ID"]
        )

        self.assertEqual(
            resolution.field_to_source,
            {
                "email": "Email Address",
                "first_name": "First Name",
                "last_name": "Last Name",
                "phone": "Phone Number",
                "amount": "Donation Amount",
                "date": "Donation Date",
                "external_donation_id": "Gift ID",
            },
        )
        self.assertTrue(all(strategy == "exact_or_alias" for strategy in resolution.match_strategies.values()))
        self.assertTrue(resolution.has_donation_columns)

    def test_fuzzy_match_for_decorated_header(self) -> None:
        resolution = self.mapper.resolve(["Primary Email", "Amount"])

        self.assertEqual(resolution.field_to_source["email"], "Primary Email")
        self.assertEqual(resolution.match_strategies["email"], "fuzzy")

    def test_numbered_header_matches_by_prefix(self) -> None:
        resolution = self.mapper.resolve(["Email2", "Amount"])

        self.assertEqual(resolution.field_to_source["email"], "Email2")

    def test_mailing_address_is_not_an_email_column(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.mapper.resolve(["Name", "Mailing Address", "Amount"])

        codes = {error.code for error in ctx.exception.errors}
        self.assertIn("required_field_unmapped", codes)

    def test_date_of_birth_is_not_a_donation_date(self) -> None:
        resolution = self.mapper.resolve(["Email", "Amount", "Date of Birth"])

        self.assertNotIn("date", resolution.field_to_source)
        self.assertEqual(resolution.field_to_source, {"email": "Email", "amount": "Amount"})

    def test_short_names_do_not_match_by_substring(self) -> None:
        resolution = self.mapper.resolve(["Email", "Valid Until"])

        self.assertNotIn("external_id", resolution.field_to_source)

    def test_similar_id_headers_resolve_to_their_own_fields(self) -> None:
        resolution = self.mapper.resolve(["Email", "Donation ID", "Donor ID"])

        self.assertEqual(resolution.field_to_source["external_donation_id"], "Donation ID")
        self.assertEqual(resolution.field_to_source["external_id"], "Donor ID")

    def test_donor_only_sheet_has_no_donation_columns(self) -> None:
        resolution = self.mapper.resolve(["Email", "First Name"])

        self.assertFalse(resolution.has_donation_columns)

    def test_missing_email_column_raises(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.mapper.resolve(["Name", "Amount"])

        self.assertIn("email", str(ctx.exception))
        codes = {error.code for error in ctx.exception.errors}
        self.assertIn("required_field_unmapped", codes)

    def test_empty_headers_raise(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.mapper.resolve(["", "   ", None])

        self.assertEqual(ctx.exception.errors[0].code, "empty_headers")

    def test_map_row_picks_resolved_columns(self) -> None:
        resolution = self.mapper.resolve(["Email", "Amount", "Notes"])

        mapped = self.mapper.map_row(
            raw_row={"Email": "jane@example.org", "Amount": "10", "Notes": "ignored"},
            resolution=resolution,
        )

        self.assertEqual(mapped, {"email": "jane@example.org", "amount": "10"})

    def test_custom_aliases(self) -> None:
        mapper = DonorColumnMapper(aliases={"email": ("correo",), "amount": ("monto",)})

        resolution = mapper.resolve(["Correo", "Monto"])

        self.assertEqual(resolution.field_to_source, {"email": "Correo", "amount": "Monto"})


class TestMappingValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = MappingValidator(required_fields=("email",), known_fields=("email", "amount"))

    def test_accepts_valid_mapping(self) -> None:
        self.validator.validate(mapping={"email": "Email"}, source_headers=("Email",))

    def test_rejects_unknown_source_column(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.validator.validate(mapping={"email": "Mail"}, source_headers=("Email",))

        codes = {error.code for error in ctx.exception.errors}
        self.assertEqual(codes, {"unknown_source_column"})

    def test_rejects_column_mapped_twice(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.validator.validate(
                mapping={"email": "Email", "amount": "Email"},
                source_headers=("Email",),
            )

        self.assertEqual(ctx.exception.errors[0].code, "duplicate_source_column")
        self.assertEqual(ctx.exception.errors[0].field, "amount")

    def test_to_dict_lists_errors(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.validator.validate(mapping={}, source_headers=("Name",))

        payload = ctx.exception.to_dict()
        self.assertEqual(payload["message"], "Column mapping failed. Missing required columns: email.")
        self.assertEqual(payload["errors"][0]["field"], "email")


if __name__ == "__main__":
    unittest.main()
