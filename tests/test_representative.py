"""
Representative selection tests.
"""

from learngraph.pipeline.representative import (
    STRATEGY_AGGREGATED,
    STRATEGY_MIN_PREREQS,
    assign_representatives,
    build_aggregate_profile,
    min_prereqs_key,
    select_min_prereqs,
)
from learngraph.pipeline.resolver import resolve_entities
from learngraph.pipeline.serializer import payload_to_dict, build_payload
from learngraph.schemas import ModuleNode


def _catalog(rows):
    return resolve_entities(rows)


class TestMinPrereqs:
    """Test the minPrereqs pick."""

    def test_fewest_prerequisites_wins(self, make_row):
        catalog = _catalog([
            make_row("Easy but needy", "Calculus", prereqs="Algebra | Logic", difficulty="Beginner"),
            make_row("Hard but standalone", "Calculus", difficulty="Advanced"),
        ])
        module = catalog.modules["math-calculus"]
        owned = [r for r in catalog.resources if r.module_id == module.id]
        profile = select_min_prereqs(module, owned)
        assert profile.type == "resource"
        assert profile.resource_id == "hard-but-standalone-calculus"
        assert profile.label == "Hard but standalone"
        assert profile.summary == "Selected by minPrereqs strategy with 0 prerequisite modules."

    def test_difficulty_breaks_ties(self, make_row):
        catalog = _catalog([
            make_row("Zeta", "Calculus", difficulty="Advanced"),
            make_row("Omega", "Calculus", difficulty="Intermediate"),
        ])
        profile = select_min_prereqs(catalog.modules["math-calculus"], catalog.resources)
        assert profile.label == "Omega"

    def test_name_breaks_remaining_ties(self, make_row):
        catalog = _catalog([
            make_row("Beta", "Calculus", prereqs="Algebra"),
            make_row("Alpha", "Calculus", prereqs="Logic"),
        ])
        owned = [r for r in catalog.resources if r.module_id == "math-calculus"]
        profile = select_min_prereqs(catalog.modules["math-calculus"], owned)
        assert profile.label == "Alpha"
        assert profile.summary == "Selected by minPrereqs strategy with 1 prerequisite modules."

    def test_pick_is_minimal(self, sample_rows):
        catalog = _catalog(sample_rows)
        assign_representatives(catalog.modules, catalog.resources)
        by_id = {r.id: r for r in catalog.resources}
        for module in catalog.modules.values():
            profile = module.representative_profiles[STRATEGY_MIN_PREREQS]
            owned = [by_id[rid] for rid in module.resource_ids]
            chosen = by_id[profile.resource_id]
            assert all(min_prereqs_key(chosen) <= min_prereqs_key(r) for r in owned)

    def test_no_resources_placeholder(self):
        module = ModuleNode(id="math-logic", name="Logic", area="Math")
        profile = select_min_prereqs(module, [])
        assert profile.type == "synthetic"
        assert profile.label == "Unavailable"
        assert profile.resource_id is None
        assert profile.synthetic.id == "synthetic-math-logic"
        assert profile.synthetic.average_difficulty == 0
        assert profile.synthetic.aggregated_tags == []
        assert profile.synthetic.aggregated_prereq_module_ids == []


class TestAggregated:
    """Test the aggregated synthetic profile."""

    def test_average_and_unions(self, sample_rows):
        catalog = _catalog(sample_rows)
        module = catalog.modules["math-calculus"]
        owned = [r for r in catalog.resources if r.module_id == module.id]
        profile = build_aggregate_profile(module, owned)
        assert profile.type == "synthetic"
        assert profile.label == "Calculus Aggregate"
        assert profile.synthetic.average_difficulty == 2.5
        assert profile.synthetic.aggregated_tags == [
            "Math",
            "Math>Calculus",
            "Math>Calculus>Derivatives",
        ]
        assert profile.synthetic.aggregated_prereq_module_ids == ["math-algebra"]

    def test_average_is_mean_of_weights(self, make_row):
        catalog = _catalog([
            make_row("a", "Mix", difficulty="Beginner"),
            make_row("b", "Mix", difficulty="Beginner"),
            make_row("c", "Mix", difficulty="Advanced"),
        ])
        profile = build_aggregate_profile(catalog.modules["math-mix"], catalog.resources)
        assert abs(profile.synthetic.average_difficulty - 5 / 3) < 1e-9

    def test_no_resources(self):
        module = ModuleNode(id="math-logic", name="Logic", area="Math")
        profile = build_aggregate_profile(module, [])
        assert profile.label == "Aggregate"
        assert profile.summary == "No resources to aggregate."
        assert profile.synthetic.average_difficulty == 0


class TestAssignRepresentatives:
    """Test storing profiles on modules."""

    def test_both_strategies_stored(self, sample_rows):
        catalog = _catalog(sample_rows)
        assign_representatives(catalog.modules, catalog.resources)
        for module in catalog.modules.values():
            assert set(module.representative_profiles) == {STRATEGY_MIN_PREREQS, STRATEGY_AGGREGATED}
        algebra = catalog.modules["math-algebra"]
        assert algebra.representative_profiles[STRATEGY_MIN_PREREQS].resource_id == "intro-to-algebra-algebra"

    def test_placeholder_module_gets_placeholders(self, make_row):
        catalog = _catalog([make_row("Limits", "Calculus", prereqs="Set Theory")])
        assign_representatives(catalog.modules, catalog.resources)
        placeholder = catalog.modules["math-set-theory"]
        assert placeholder.representative_profiles[STRATEGY_MIN_PREREQS].label == "Unavailable"
        assert placeholder.representative_profiles[STRATEGY_AGGREGATED].label == "Aggregate"

    def test_idempotent(self, sample_rows):
        catalog = _catalog(sample_rows)
        assign_representatives(catalog.modules, catalog.resources)
        first = payload_to_dict(build_payload(catalog.modules, catalog.resources, [], catalog.tag_tree, "t"))
        assign_representatives(catalog.modules, catalog.resources)
        second = payload_to_dict(build_payload(catalog.modules, catalog.resources, [], catalog.tag_tree, "t"))
        assert first == second
