# tests/generators/test_gen.py
"""Tests for the generator combinators.

Values come from a ScriptedSource so each test pins down exactly which
draws a combinator makes and in what order.
"""

import pytest

from falsify.contracts import INT64_MAX, Constraint, GenerationExhausted, Maybe
from falsify.core.randomness import PseudoRandom
from falsify.generators import Gen, constant, integers
from tests.conftest import Cycling, ScriptedSource


def raw() -> Gen[int]:
    """Generator returning the next scripted value unchanged."""
    return Gen.of(lambda source: source.next(Constraint.none()))


def draw_all(gen: Gen[object], source: ScriptedSource, count: int) -> list[object]:
    return [gen.generate(source) for _ in range(count)]


class TestAssuming:
    """Filtering redraws and counts rejections."""

    def test_rejected_values_are_redrawn(self) -> None:
        source = ScriptedSource(1, 2, 3, 4)

        values = draw_all(raw().assuming(lambda i: i != 3), source, 3)

        assert values == [1, 2, 4]
        assert source.failed_assumptions == 1

    def test_cycling_values_skip_rejected(self) -> None:
        source = ScriptedSource()

        values = draw_all(Cycling(1, 2, 3, 4).assuming(lambda i: i != 3), source, 3)

        assert values == [1, 2, 4]
        assert source.failed_assumptions == 1

    def test_exhausts_after_generate_attempts(self) -> None:
        source = ScriptedSource(*range(10), generate_attempts=3)

        with pytest.raises(GenerationExhausted) as exc_info:
            raw().assuming(lambda i: False).generate(source)

        assert exc_info.value.attempts == 3
        assert source.failed_assumptions == 3
        assert source.remaining == 7

    def test_chained_filters(self) -> None:
        source = ScriptedSource(1, 2, 3, 4, 6)

        gen = raw().assuming(lambda i: i % 2 == 0).assuming(lambda i: i > 2)

        assert gen.generate(source) == 4
        assert source.failed_assumptions == 3


class TestZip:
    def test_draws_left_to_right(self) -> None:
        source = ScriptedSource(1, 2, 3, 4)

        pairs = draw_all(raw().zip(raw(), combine=lambda a, b: (a, b)), source, 2)

        assert pairs == [(1, 2), (3, 4)]

    def test_combines(self) -> None:
        source = ScriptedSource(1, 2, 3, 4, 5, 6, 7, 8)

        sums = draw_all(raw().zip(raw(), combine=lambda a, b: a + b), source, 4)

        assert sums == [3, 7, 11, 15]

    def test_zip_sequences_by_addition(self) -> None:
        gen = Cycling(1, 2, 3, 4).zip(Cycling(2, 4, 6, 8), combine=lambda a, b: a + b)

        assert draw_all(gen, ScriptedSource(), 4) == [3, 6, 9, 12]

    def test_zip_five_sequences(self) -> None:
        gens = [Cycling(1, 2, 3, 4) for _ in range(5)]

        gen = gens[0].zip(*gens[1:], combine=lambda *values: sum(values))

        assert draw_all(gen, ScriptedSource(), 4) == [5, 10, 15, 20]

    def test_five_way(self) -> None:
        source = ScriptedSource(*range(1, 11))

        gen = raw().zip(raw(), raw(), raw(), raw(), combine=lambda *values: sum(values))

        assert draw_all(gen, source, 2) == [15, 40]

    def test_needs_another_generator(self) -> None:
        with pytest.raises(ValueError):
            raw().zip(combine=lambda a: a)


class TestMix:
    """The selector is drawn first; other is used when it is below weight."""

    def test_selector_chooses_generator(self) -> None:
        source = ScriptedSource(0, 99, 0)

        values = draw_all(constant(1).mix(constant(2), weight=50), source, 3)

        assert values == [2, 1, 2]

    def test_only_selected_generator_draws(self) -> None:
        source = ScriptedSource(0, 10, 99, 20)

        values = draw_all(raw().mix(raw().map(lambda i: -i), weight=50), source, 2)

        assert values == [-10, 20]

    def test_zero_weight_never_uses_other(self) -> None:
        source = ScriptedSource(0, 0, 0)
        assert draw_all(constant(1).mix(constant(2), weight=0), source, 3) == [1, 1, 1]

    def test_full_weight_always_uses_other(self) -> None:
        source = ScriptedSource(99, 50, 0)
        assert draw_all(constant(1).mix(constant(2), weight=100), source, 3) == [2, 2, 2]

    def test_intermediate_weight_yields_both(self) -> None:
        source = PseudoRandom(17).new_source(generate_attempts=10)

        values = {constant(1).mix(constant(2), weight=30).generate(source) for _ in range(200)}

        assert values == {1, 2}

    @pytest.mark.parametrize("weight", [-1, 101])
    def test_weight_out_of_range(self, weight: int) -> None:
        with pytest.raises(ValueError, match="weight"):
            constant(1).mix(constant(2), weight=weight)


class TestToOptionals:
    def test_never_empty_at_zero_percent(self) -> None:
        source = ScriptedSource(0, 5, 0, 6)

        values = draw_all(raw().to_optionals(0), source, 2)

        assert values == [Maybe.of(5), Maybe.of(6)]

    def test_always_empty_at_hundred_percent(self) -> None:
        source = ScriptedSource(99, 0)

        values = draw_all(raw().to_optionals(100), source, 2)

        assert values == [Maybe.empty(), Maybe.empty()]

    def test_empty_box_makes_no_further_draws(self) -> None:
        source = ScriptedSource(10, 60, 7)

        values = draw_all(raw().to_optionals(50), source, 2)

        assert values == [Maybe.empty(), Maybe.of(7)]

    def test_intermediate_percent_yields_both(self) -> None:
        source = PseudoRandom(17).new_source(generate_attempts=10)

        values = {constant(1).to_optionals(30).generate(source) for _ in range(200)}

        assert values == {Maybe.empty(), Maybe.of(1)}

    def test_one_percent_includes_some_empty(self) -> None:
        source = PseudoRandom(23).new_source(generate_attempts=10)

        values = [constant(1).to_optionals(1).generate(source) for _ in range(2000)]

        empty = values.count(Maybe.empty())
        assert 0 < empty < 100

    def test_percent_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="percent_empty"):
            raw().to_optionals(101)


class TestMapFlatMapMutate:
    def test_map(self) -> None:
        source = ScriptedSource(3)
        assert raw().map(lambda i: i * 10).generate(source) == 30

    def test_flat_map_draws_outer_then_inner(self) -> None:
        source = ScriptedSource(2, 7, 8)

        gen = raw().flat_map(lambda n: integers(0, 100).zip(constant(n), combine=lambda a, b: a * b))

        assert gen.generate(source) == 14
        assert source.remaining == 1

    def test_mutate_uses_same_source(self) -> None:
        source = ScriptedSource(4, 11)

        gen = raw().mutate(lambda value, src: value + src.next(Constraint.between(0, 100)))

        assert gen.generate(source) == 15
        assert source.history.values == (4, 11)

    def test_combinators_do_not_mutate_parent(self) -> None:
        base = raw().described_as(lambda i: f"<{i}>")
        base.map(str)
        base.assuming(lambda i: True)
        assert base.as_string(1) == "<1>"


class TestDisplay:
    """as_string() rendering and which combinators keep a display function."""

    def test_default_is_str(self) -> None:
        assert integers().as_string(42) == "42"

    def test_none_renders_as_null(self) -> None:
        assert constant(None).as_string(None) == "null"

    def test_described_as(self) -> None:
        assert integers().described_as(lambda i: f"#{i}").as_string(5) == "#5"

    def test_assuming_keeps_display(self) -> None:
        gen = integers().described_as(lambda i: f"#{i}").assuming(lambda i: True)
        assert gen.as_string(5) == "#5"

    def test_map_drops_display(self) -> None:
        gen = integers().described_as(lambda i: f"#{i}").map(lambda i: i)
        assert gen.as_string(5) == "5"

    def test_mix_drops_display(self) -> None:
        gen = integers().described_as(lambda i: f"#{i}").mix(integers())
        assert gen.as_string(5) == "5"

    def test_of_with_display(self) -> None:
        gen = Gen.of(lambda source: source.next(Constraint.between(0, INT64_MAX)), display=lambda i: "x" * i)
        assert gen.as_string(3) == "xxx"
