"""Tests for track constructors and per-kind geometry."""

import math

import numpy as np
import pytest

from circos_scene.config.resolver import ConfigResolver
from circos_scene.core.errors import (
    DEGENERATE_RANGE,
    POSITION_CLAMPED,
    MismatchedLength,
    UnknownOption,
)
from circos_scene.core.mapping import AngleMapper
from circos_scene.layout.geometry import ArcSpan, Chord, PointMark, Polyline, Ring, TextLabel
from circos_scene.track import (
    ArcTrack,
    BackgroundTrack,
    BarTrack,
    CNVTrack,
    HeatmapTrack,
    LineTrack,
    LinkTrack,
    SNPTrack,
    TextTrack,
)
from circos_scene.track.line import segment_runs


def geometry(track, cs, padding=0.0):
    style = ConfigResolver().resolve(track)
    return track.compute_geometry(AngleMapper(cs, padding), style)


class TestTrackValidation:
    def test_empty_name(self):
        with pytest.raises(ValueError, match="non-empty"):
            BackgroundTrack("")

    def test_min_radius_negative(self):
        with pytest.raises(ValueError, match=">= 0"):
            BackgroundTrack("bg", min_radius=-0.1)

    def test_min_not_below_max(self):
        with pytest.raises(ValueError, match="smaller"):
            BackgroundTrack("bg", min_radius=0.9, max_radius=0.9)

    def test_mismatched_lengths(self):
        with pytest.raises(MismatchedLength, match="equal length"):
            SNPTrack("snps", ["1", "2"], [1, 2, 3], [0.1, 0.2])

    def test_empty_segment_name(self):
        with pytest.raises(ValueError, match="non-empty segment names"):
            SNPTrack("snps", ["1", ""], [1, 2], [0.1, 0.2])

    def test_none_segment_name(self):
        with pytest.raises(ValueError, match="non-empty segment names"):
            ArcTrack("arcs", [None], [1], [2])

    def test_integer_segments_become_strings(self):
        track = SNPTrack("snps", [1, 2], [1, 2], [0.1, 0.2])
        assert track.chromosomes.tolist() == ["1", "2"]

    def test_per_point_style_wrong_length(self):
        with pytest.raises(MismatchedLength, match="colors"):
            SNPTrack("snps", ["1", "2"], [1, 2], [0.1, 0.2], colors=["red"])

    def test_per_point_style_ok(self):
        track = SNPTrack("snps", ["1", "2"], [1, 2], [0.1, 0.2], colors=["red", "blue"])
        assert track.style["colors"] == ("red", "blue")

    def test_per_bar_color_wrong_length(self):
        with pytest.raises(MismatchedLength, match="color"):
            BarTrack("bars", ["1", "1"], [0, 5], [1, 6], [1.0, 2.0], color=["#ff0000"])

    def test_per_link_opacity_wrong_length(self):
        with pytest.raises(MismatchedLength, match="opacity"):
            LinkTrack("links", ["1"], [0], [1], ["2"], [0], [1], opacity=[0.1, 0.2])

    def test_single_value_option_rejects_list(self):
        with pytest.raises(ValueError, match="single value"):
            LineTrack("line", ["1", "1"], [1, 2], [1.0, 2.0], color=["red", "blue"])

    def test_width_rejects_list(self):
        with pytest.raises(ValueError, match="single value"):
            LinkTrack("links", ["1"], [0], [1], ["2"], [0], [1], width=[2.0])

    def test_rgb_tuple_is_one_color(self):
        line = LineTrack("line", ["1"], [1], [1.0], color=(1.0, 0.0, 0.0))
        assert line.style["color"] == "#ff0000"
        bars = BarTrack("bars", ["1", "1"], [0, 5], [1, 6], [1.0, 2.0], color=(0.0, 0.0, 1.0))
        assert bars.style["color"] == "#0000ff"

    def test_invalid_color_rejected(self):
        with pytest.raises(ValueError, match="invalid colors"):
            SNPTrack("snps", ["1", "2"], [1, 2], [0.1, 0.2], colors=["red", "not-a-color"])

    def test_non_color_value_rejected(self):
        with pytest.raises(ValueError, match="must be a color"):
            BarTrack("bars", ["1"], [0], [1], [1.0], color=42)

    def test_gradient_needs_two_stops(self):
        with pytest.raises(ValueError, match="at least two"):
            HeatmapTrack("heat", ["1"], [0], [1], [1.0], colors=["#000000"])

    def test_background_accepts_color_list(self):
        track = BackgroundTrack("bg", fill_colors=["#ffffff", "#eeeeee"])
        assert list(track.style["fill_colors"]) == ["#ffffff", "#eeeeee"]

    def test_unknown_style_option(self):
        with pytest.raises(UnknownOption, match="colr"):
            SNPTrack("snps", ["1"], [1], [0.1], colr="red")

    def test_labels_length(self):
        with pytest.raises(MismatchedLength, match="labels"):
            ArcTrack("arcs", ["1", "1"], [1, 2], [3, 4], labels=["only one"])

    def test_inverted_interval(self):
        with pytest.raises(ValueError, match="starts must not exceed ends"):
            BarTrack("bars", ["1"], [10], [5], [1.0])

    def test_bad_range(self):
        with pytest.raises(ValueError, match="range"):
            BarTrack("bars", ["1"], [1], [5], [1.0], range="wide")

    def test_constructor_does_not_need_genome(self):
        track = LinkTrack("links", ["nowhere"], [1], [2], ["elsewhere"], [3], [4])
        assert track.segments() == {"nowhere", "elsewhere"}

    def test_arrays_are_readonly(self):
        track = SNPTrack("snps", ["1"], [1], [0.1])
        with pytest.raises(ValueError):
            track.positions[0] = 5.0


class TestTrackCopies:
    def test_with_style_merges(self):
        track = BackgroundTrack("bg", border_size=1.0)
        styled = track.with_style(fill_colors="#ffffff")
        assert dict(styled.style) == {"border_size": 1.0, "fill_colors": "#ffffff"}
        assert dict(track.style) == {"border_size": 1.0}

    def test_with_style_validates(self):
        with pytest.raises(UnknownOption):
            BackgroundTrack("bg").with_style(colour="red")

    def test_renamed(self):
        track = BackgroundTrack("bg")
        assert track.renamed("bg2").name == "bg2"
        assert track.name == "bg"


class TestFromDataFrame:
    def test_snp_from_columns(self, snp_df):
        track = SNPTrack.from_dataframe(
            "snps", snp_df, chromosomes="chrom", positions="pos", values="score", labels="gene",
        )
        assert len(track) == 4
        assert track.labels.tolist() == ["TP53", "EGFR", "MYC", "KRAS"]

    def test_default_column_names(self, interval_df):
        track = BarTrack.from_dataframe("bars", interval_df)
        assert track.values.tolist() == [1.0, 3.0, 2.0]

    def test_missing_column(self, snp_df):
        with pytest.raises(KeyError, match="nope"):
            SNPTrack.from_dataframe("snps", snp_df, chromosomes="nope")

    def test_requires_dataframe(self):
        with pytest.raises(TypeError, match="DataFrame"):
            SNPTrack.from_dataframe("snps", {"chromosomes": ["1"]})


class TestPointGeometry:
    def test_scenario_angle_and_radius(self, two_segment_genome):
        # The point carrying the largest value lands on the outer edge
        track = SNPTrack("snps", ["A", "B", "B"], [1, 5, 10], [0, 2, 1],
                         min_radius=0.5, max_radius=0.9)
        result = geometry(track, two_segment_genome)
        point = result.primitives[1]
        assert isinstance(point, PointMark)
        assert point.angle == pytest.approx(math.pi)
        assert point.radius == pytest.approx(0.9)
        assert result.value_range == (0.0, 2.0)

    def test_middle_value(self, two_segment_genome):
        track = SNPTrack("snps", ["A", "B", "B"], [1, 5, 10], [0, 1, 2],
                         min_radius=0.5, max_radius=0.9)
        result = geometry(track, two_segment_genome)
        assert result.primitives[1].radius == pytest.approx(0.7)

    def test_colors_cycle_palette(self, small_genome):
        track = SNPTrack("snps", ["1", "2", "3"], [1, 2, 3], [1, 2, 3],
                         colors=("#ff0000", "#00ff00", "#0000ff"))
        colors = [p.color for p in geometry(track, small_genome).primitives]
        assert colors == ["#ff0000", "#00ff00", "#0000ff"]

    def test_labels_hidden(self, small_genome):
        track = SNPTrack("snps", ["1"], [1], [1], labels=["x"], display_labels=False)
        assert geometry(track, small_genome).primitives[0].label is None

    def test_clamped_position_warns(self, small_genome):
        track = SNPTrack("snps", ["2"], [75], [1])
        kinds = [w.kind for w in geometry(track, small_genome).warnings]
        assert POSITION_CLAMPED in kinds

    def test_single_value_is_degenerate(self, small_genome):
        track = SNPTrack("snps", ["1"], [5], [3.0], min_radius=0.2, max_radius=0.4)
        result = geometry(track, small_genome)
        assert result.primitives[0].radius == pytest.approx(0.3)
        assert [w.kind for w in result.warnings] == [DEGENERATE_RANGE]


class TestIntervalGeometry:
    def test_arc_spans_full_band(self, two_segment_genome):
        track = ArcTrack("arcs", ["B"], [0], [10], min_radius=0.6, max_radius=0.7)
        arc = geometry(track, two_segment_genome).primitives[0]
        assert isinstance(arc, ArcSpan)
        assert arc.start_angle == pytest.approx(2 * math.pi / 3)
        assert arc.end_angle == pytest.approx(math.pi * 4 / 3)
        assert (arc.inner_radius, arc.outer_radius) == (0.6, 0.7)
        assert arc.sweep == pytest.approx(2 * math.pi / 3)

    def test_bar_radius_from_value(self, small_genome, interval_df):
        track = BarTrack.from_dataframe("bars", interval_df, min_radius=0.5, max_radius=0.9)
        radii = [b.outer_radius for b in geometry(track, small_genome).primitives]
        np.testing.assert_allclose(radii, [0.5, 0.9, 0.7])
        assert all(b.inner_radius == 0.5 for b in geometry(track, small_genome).primitives)

    def test_bar_explicit_range(self, small_genome, interval_df):
        track = BarTrack.from_dataframe("bars", interval_df, range=(0, 4),
                                        min_radius=0.5, max_radius=0.9)
        result = geometry(track, small_genome)
        assert result.value_range == (0.0, 4.0)
        assert result.primitives[1].outer_radius == pytest.approx(0.8)

    def test_bar_per_datum_color_and_opacity(self, small_genome):
        track = BarTrack("bars", ["1", "1"], [0, 5], [1, 6], [1.0, 2.0],
                         color=["#ff0000", "#00ff00"], opacity=[0.2, 0.8])
        bars = geometry(track, small_genome).primitives
        assert [b.color for b in bars] == ["#ff0000", "#00ff00"]
        assert [b.opacity for b in bars] == [0.2, 0.8]

    def test_bar_default_color(self, small_genome):
        track = BarTrack("bars", ["1", "1"], [0, 5], [1, 6], [1.0, 2.0])
        bars = geometry(track, small_genome).primitives
        assert {b.color for b in bars} == {"#40b9d4"}
        assert {b.opacity for b in bars} == {1.0}

    def test_heatmap_colors_not_radius(self, small_genome, interval_df):
        track = HeatmapTrack.from_dataframe("heat", interval_df, colors=["#000000", "#ffffff"])
        cells = geometry(track, small_genome).primitives
        assert {(c.inner_radius, c.outer_radius) for c in cells} == {(0.5, 0.9)}
        assert cells[0].color == "#000000"
        assert cells[1].color == "#ffffff"

    def test_heatmap_legend(self, small_genome, interval_df):
        track = HeatmapTrack.from_dataframe("heat", interval_df)
        assert len(geometry(track, small_genome).legend["gradient"]) == 5

    def test_cnv_colored_by_value(self, small_genome, interval_df):
        track = CNVTrack.from_dataframe("cnv", interval_df, colors="viridis")
        cells = geometry(track, small_genome).primitives
        assert len({c.color for c in cells}) == 3


class TestLinkGeometry:
    def test_chord_between_midpoints(self, two_segment_genome):
        track = LinkTrack("links", ["A"], [0], [10], ["B"], [0], [20], max_radius=0.4)
        chord = geometry(track, two_segment_genome).primitives[0]
        assert isinstance(chord, Chord)
        assert chord.source_angle == pytest.approx(2 * math.pi * 5 / 30)
        assert chord.target_angle == pytest.approx(math.pi * 4 / 3)
        assert chord.radius == 0.4

    def test_per_link_color(self, two_segment_genome):
        track = LinkTrack("links", ["A", "A"], [0, 1], [1, 2], ["B", "B"], [0, 1], [1, 2],
                          color=["red", "blue"], opacity=0.5)
        chords = geometry(track, two_segment_genome).primitives
        assert [c.color for c in chords] == ["red", "blue"]
        assert [c.opacity for c in chords] == [0.5, 0.5]
        assert chords[0].to_dict()["color"] == "red"

    def test_labels(self, two_segment_genome):
        track = LinkTrack("links", ["A"], [0], [1], ["B"], [0], [1], labels=["fusion"])
        assert geometry(track, two_segment_genome).primitives[0].label == "fusion"


class TestLineGeometry:
    def test_cross_segment_edge_dropped(self):
        track = LineTrack("line", [1, 1, 2], [5, 8, 1], [1, 2, 3])
        assert track.edges() == [(0, 1)]

    def test_polylines_per_run(self, small_genome):
        track = LineTrack("line", [1, 1, 2], [5, 8, 1], [1, 2, 3])
        lines = geometry(track, small_genome).primitives
        assert [type(p) for p in lines] == [Polyline, Polyline]
        assert [len(p) for p in lines] == [2, 1]
        assert lines[0].segment == "1"

    def test_returning_to_segment_starts_new_run(self):
        runs = segment_runs(np.array(["1", "2", "1"], dtype=object))
        assert runs == [(0, 1), (1, 2), (2, 3)]

    def test_empty(self):
        assert segment_runs(np.array([], dtype=object)) == []


class TestNonPositionalGeometry:
    def test_background_ring(self, small_genome):
        ring = geometry(BackgroundTrack("bg", 0.2, 0.4), small_genome).primitives[0]
        assert isinstance(ring, Ring)
        assert (ring.inner_radius, ring.outer_radius) == (0.2, 0.4)
        assert ring.end_angle == pytest.approx(2 * math.pi)

    def test_text_label(self, small_genome):
        label = geometry(TextTrack("title", "hello", x=0.1, y=0.2), small_genome).primitives[0]
        assert label == TextLabel(0.1, 0.2, "hello")
        assert TextTrack("title", "hello", x=0.1, y=0.2).anchor == (0.1, 0.2)

    def test_text_has_no_segments(self):
        assert TextTrack("title", "hi").segments() == set()

    def test_text_must_be_string(self):
        with pytest.raises(TypeError):
            TextTrack("title", 42)
