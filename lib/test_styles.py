"""Tests for alteration records and their styles."""

import pytest
from oncoprint.schema import AlterationRecord, AlterationType
from oncoprint.styles import (
    ALTERATION_STYLES,
    FALLBACK_STYLE,
    describe,
    resolve_style,
    style_key,
    style_rank,
)
from pydantic import ValidationError


def record(alteration_type: str, alteration: str | None = None) -> AlterationRecord:
    return AlterationRecord(
        sample="S1",
        gene="TP53",
        alteration_type=alteration_type,
        alteration=alteration,
    )


class TestAlterationRecord:
    """Test record validation."""

    def test_accepts_type_aliases(self) -> None:
        by_type = AlterationRecord.model_validate(
            {"sample": "S1", "gene": "TP53", "type": "CNA"},
        )
        by_camel_case = AlterationRecord.model_validate(
            {"sample": "S1", "gene": "TP53", "alterationType": "CNA"},
        )

        assert by_type == by_camel_case
        assert by_type.alteration_type == "CNA"

    def test_known_types_are_case_insensitive(self) -> None:
        assert record("mutation").alteration_type == "MUTATION"
        assert record(" exp ").alteration_type == "EXP"
        assert record(AlterationType.FUSION).alteration_type == "FUSION"

    def test_unknown_types_are_kept(self) -> None:
        unknown = record("Methylation")

        assert unknown.alteration_type == "Methylation"
        assert not unknown.is_known_type
        assert record("CNA").is_known_type

    def test_strips_identifiers(self) -> None:
        stripped = AlterationRecord(sample=" S1 ", gene="TP53 ", alteration_type="CNA")

        assert stripped.sample == "S1"
        assert stripped.gene == "TP53"

    @pytest.mark.parametrize("missing", ["sample", "gene", "type"])
    def test_requires_fields(self, missing: str) -> None:
        fields = {"sample": "S1", "gene": "TP53", "type": "CNA"}
        del fields[missing]

        with pytest.raises(ValidationError):
            AlterationRecord.model_validate(fields)

    def test_is_immutable(self) -> None:
        with pytest.raises(ValidationError):
            record("CNA").gene = "KRAS"


class TestStyles:
    """Test the alteration style table."""

    def test_cna_subtypes_have_own_layers(self) -> None:
        assert style_key(record("CNA", "amp")) == ("CNA", "AMP")
        assert resolve_style(record("CNA", "AMP")).name == "Amplification"
        assert resolve_style(record("CNA", "HOMDEL")).name == "Deep deletion"

    def test_unknown_cna_call_uses_generic_cna(self) -> None:
        style = resolve_style(record("CNA", "WEIRD"))

        assert style_key(record("CNA", "WEIRD")) == ("CNA", None)
        assert style.name == "Copy number alteration"
        assert style.width == pytest.approx(0.8)

    def test_mutations_grouped_by_type_only(self) -> None:
        assert style_key(record("MUTATION", "V600E")) == ("MUTATION", None)
        assert style_key(record("MUTATION", "AMP")) == ("MUTATION", None)

    def test_widths_depend_on_type(self) -> None:
        assert resolve_style(record("CNA", "GAIN")).width == pytest.approx(0.8)
        assert resolve_style(record("EXP", "DOWN")).width == pytest.approx(0.6)
        assert resolve_style(record("MUTATION")).width == pytest.approx(0.4)
        assert resolve_style(record("FUSION")).width == pytest.approx(0.4)

    def test_unknown_type_falls_back(self) -> None:
        assert resolve_style(record("METHYLATION")) is FALLBACK_STYLE

    def test_unknown_keys_rank_last(self) -> None:
        assert style_rank(("METHYLATION", None)) == len(ALTERATION_STYLES)
        assert style_rank(("CNA", "AMP")) < style_rank(("MUTATION", None))

    def test_colors_are_distinct(self) -> None:
        colors = [style.color for style in ALTERATION_STYLES.values()]

        assert len(colors) == len(set(colors))
        assert FALLBACK_STYLE.color not in colors


class TestDescribe:
    """Test hover descriptions."""

    @pytest.mark.parametrize(
        ("alteration_type", "alteration", "expected"),
        [
            ("MUTATION", "V600E", "V600E"),
            ("MUTATION", None, "Mutation"),
            ("CNA", "HETLOSS", "Shallow deletion"),
            ("CNA", "LOH", "Copy number alteration (LOH)"),
            ("EXP", "UP", "mRNA upregulation"),
            ("EXP", None, "mRNA expression change"),
            ("FUSION", "EML4", "EML4 fusion"),
            ("FUSION", None, "Fusion"),
            ("METHYLATION", "hyper", "METHYLATION: hyper"),
            ("METHYLATION", None, "METHYLATION"),
        ],
    )
    def test_describe(
        self,
        alteration_type: str,
        alteration: str | None,
        expected: str,
    ) -> None:
        assert describe(record(alteration_type, alteration)) == expected
