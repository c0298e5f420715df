"""Tests for CoordinateSystem."""

import numpy as np
import pandas as pd
import pytest

from circos_scene.core.errors import InvalidGenome, UnknownSegment
from circos_scene.core.genome import GENOMES, CoordinateSystem


class TestCoordinateSystemBuild:
    def test_offsets_and_total(self, two_segment_genome):
        assert two_segment_genome.offset_of("A") == 0
        assert two_segment_genome.offset_of("B") == 10
        assert two_segment_genome.total_length() == 30

    def test_offsets_are_cumulative(self):
        lengths = [5, 7, 11, 13]
        cs = CoordinateSystem.build({f"s{i}": n for i, n in enumerate(lengths)})
        for k in range(len(lengths)):
            assert cs.offset_of(f"s{k}") == sum(lengths[:k])
        assert cs.total_length() == sum(lengths)

    def test_insertion_order_kept(self):
        cs = CoordinateSystem.build({"b": 1, "a": 2, "c": 3})
        assert cs.names == ("b", "a", "c")
        assert cs.index_of("a") == 1

    def test_from_series(self):
        cs = CoordinateSystem.build(pd.Series([3, 4], index=["x", "y"]))
        assert cs.names == ("x", "y")
        assert cs.total_length() == 7

    def test_from_pairs(self):
        cs = CoordinateSystem.build([("x", 3), ("y", 4)])
        assert cs.offset_of("y") == 3

    def test_integer_names_become_strings(self):
        cs = CoordinateSystem.build({1: 10, 2: 20})
        assert "1" in cs
        assert cs.offset_of("2") == 10

    def test_preset(self):
        cs = CoordinateSystem.build("hg19")
        assert len(cs) == 24
        assert cs.length_of("1") == GENOMES["hg19"]["1"]

    def test_exclude(self):
        cs = CoordinateSystem.build("hg19", exclude=["Y"])
        assert "Y" not in cs
        assert len(cs) == 23

    def test_exclude_absent_name_ignored(self, two_segment_genome):
        cs = CoordinateSystem.build(two_segment_genome.to_dict(), exclude=["Z"])
        assert cs == two_segment_genome

    def test_lengths_readonly(self, two_segment_genome):
        with pytest.raises(ValueError):
            two_segment_genome.lengths[0] = 99.0


class TestCoordinateSystemValidation:
    def test_empty_raises(self):
        with pytest.raises(InvalidGenome, match="empty"):
            CoordinateSystem.build({})

    def test_everything_excluded_raises(self):
        with pytest.raises(InvalidGenome, match="empty"):
            CoordinateSystem.build({"A": 1}, exclude=["A"])

    @pytest.mark.parametrize("length", [0, -5, np.nan, np.inf])
    def test_non_positive_length_raises(self, length):
        with pytest.raises(InvalidGenome, match="positive"):
            CoordinateSystem.build({"A": 10, "B": length})

    def test_duplicate_names_raise(self):
        with pytest.raises(InvalidGenome, match="unique"):
            CoordinateSystem.build([("A", 1), ("A", 2)])

    def test_unknown_preset_raises(self):
        with pytest.raises(InvalidGenome, match="preset"):
            CoordinateSystem.build("mm99")

    def test_non_numeric_length_raises(self):
        with pytest.raises(InvalidGenome, match="numbers"):
            CoordinateSystem.build({"A": "long"})

    def test_unknown_segment_lookup(self, two_segment_genome):
        with pytest.raises(UnknownSegment, match="'C'"):
            two_segment_genome.offset_of("C")

    def test_invalid_genome_is_value_error(self):
        with pytest.raises(ValueError):
            CoordinateSystem.build({})


class TestCoordinateSystemHelpers:
    def test_missing_keeps_first_seen_order(self, two_segment_genome):
        assert two_segment_genome.missing(["Z", "A", "Y", "Z"]) == ["Z", "Y"]

    def test_equality(self):
        assert CoordinateSystem.build({"A": 1}) == CoordinateSystem.build({"A": 1.0})
        assert CoordinateSystem.build({"A": 1}) != CoordinateSystem.build({"A": 2})

    def test_iteration(self, two_segment_genome):
        assert list(two_segment_genome) == ["A", "B"]
        assert len(two_segment_genome) == 2
