"""Tests for the OncoPrint axis layout."""

from oncoprint.layout import build_layout, x_axis_layout, y_axis_layout
from oncoprint.schema import ViewportState


class TestXAxisLayout:
    """Test the sample axis."""

    def test_autorange_by_default(self) -> None:
        axis = x_axis_layout(ViewportState(), title="Samples")

        assert axis == {
            "title": "Samples",
            "showgrid": False,
            "showticklabels": False,
            "zeroline": False,
            "autorange": True,
        }

    def test_pinned_range(self) -> None:
        viewport = ViewportState()
        viewport.pin(10, 50)

        axis = x_axis_layout(viewport)

        assert axis["autorange"] is False
        assert axis["range"] == [10, 50]

    def test_zero_start_is_pinned(self) -> None:
        viewport = ViewportState()
        viewport.pin(0, 3)

        assert x_axis_layout(viewport)["autorange"] is False

    def test_reset_returns_to_autorange(self) -> None:
        viewport = ViewportState()
        viewport.pin(1, 2)
        viewport.reset()

        assert x_axis_layout(viewport)["autorange"] is True


class TestYAxisLayout:
    """Test the gene axis."""

    def test_fixed_range(self) -> None:
        axis = y_axis_layout(title="Genes")

        assert axis["fixedrange"] is True
        assert axis["showgrid"] is False
        assert axis["title"] == "Genes"
        assert "categoryarray" not in axis

    def test_first_gene_on_top(self) -> None:
        axis = y_axis_layout(["TP53 (75%)", "KRAS (50%)"])

        assert axis["categoryorder"] == "array"
        assert axis["categoryarray"] == ["KRAS (50%)", "TP53 (75%)"]


class TestBuildLayout:
    """Test the complete layout."""

    def test_stacked_bars(self) -> None:
        layout = build_layout(ViewportState())

        assert layout["barmode"] == "stack"
        assert layout["hovermode"] == "closest"

    def test_axis_titles(self) -> None:
        layout = build_layout(ViewportState(), xlabel="Samples", ylabel="Genes")

        assert layout["xaxis"]["title"] == "Samples"
        assert layout["yaxis"]["title"] == "Genes"
