import pandas as pd
import pyarrow.parquet as pq
import shapely

from tornado_tracks.base.geo_utils import project_events
from tornado_tracks.base.parquet_utils import events_schema, save_events, save_parquet
from tornado_tracks.converters.convert_spc_tornadoes import enrich_events


class TestSaveParquet:
    def test_writes_and_reports_size(self, tmp_path):
        df = pd.DataFrame({"a": [1, 2, 3]})
        size_mb = save_parquet(df, tmp_path / "nested" / "a.parquet")
        assert (tmp_path / "nested" / "a.parquet").exists()
        assert size_mb > 0


class TestSaveEvents:
    def test_round_trip_columns(self, reconciled, tmp_path):
        events = project_events(enrich_events(reconciled))
        out = tmp_path / "events.parquet"
        save_events(events, out)

        table = pq.read_table(out)
        assert table.schema.names == events_schema().names
        assert table.num_rows == len(events)

        df = table.to_pandas()
        assert df["cas"].tolist() == events["cas"].tolist()
        assert df["ED"].tolist() == events["ED"].tolist()

    def test_geometry_stored_as_wkb(self, reconciled, tmp_path):
        events = enrich_events(reconciled)
        out = tmp_path / "events.parquet"
        save_events(events, out)

        df = pd.read_parquet(out)
        geom = shapely.from_wkb(df["geometry"].iloc[0])
        assert geom.equals(events.geometry.iloc[0])
