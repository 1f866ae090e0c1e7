import pytest

from tornado_tracks.analysis.case_study import compare_case_study
from tornado_tracks.base.geo_utils import project_events
from tornado_tracks.converters.convert_spc_tornadoes import enrich_events
from tornado_tracks.plots import (
    plot_casualty_map,
    plot_energy_vs_casualties,
    state_casualty_events,
)


@pytest.fixture
def events(reconciled):
    return project_events(enrich_events(reconciled))


@pytest.fixture
def comparison(events, run_context):
    return compare_case_study(events, run_context)


class TestStateCasualtyEvents:
    def test_filters_state_and_nonzero_casualties(self, events):
        result = state_casualty_events(events, "OH")
        assert sorted(result["om"].tolist()) == [44, 118]


class TestPlots:
    def test_scatter_written(self, events, comparison, tmp_path):
        out = plot_energy_vs_casualties(events, comparison, "OH", tmp_path / "scatter.png")
        assert out.exists()
        assert out.stat().st_size > 0

    def test_map_written(self, events, comparison, states_gdf, tmp_path):
        out = plot_casualty_map(events, comparison, states_gdf, "OH", tmp_path / "figs" / "map.png")
        assert out.exists()
        assert out.stat().st_size > 0
