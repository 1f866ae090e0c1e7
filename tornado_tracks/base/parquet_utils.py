"""
Parquet export for enriched tornado events.

Includes:
- Standardized parquet saving
- Events schema
"""
import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
import shapely
from pathlib import Path

from ..logging_config import logger


# =============================================================================
# Standard Parquet Saving
# =============================================================================

def save_parquet(df, output_path, schema=None, compression='snappy', description=None):
    """Save DataFrame to parquet with standard settings.

    Args:
        df: pandas DataFrame to save
        output_path: Path for output file
        schema: Optional pyarrow schema (inferred if not provided)
        compression: Compression codec (default 'snappy')
        description: Description for logging (default: filename)

    Returns:
        File size in MB
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    desc = description or output_path.name
    logger.info(f"  Saving {desc}...")

    if schema:
        table = pa.Table.from_pandas(df, schema=schema, preserve_index=False)
    else:
        table = pa.Table.from_pandas(df, preserve_index=False)

    pq.write_table(table, output_path, compression=compression)

    size_mb = output_path.stat().st_size / 1024 / 1024
    logger.info(f"    Saved: {output_path}")
    logger.info(f"    Size: {size_mb:.2f} MB, {len(df):,} rows")

    return size_mb


# =============================================================================
# Events Schema
# =============================================================================

def events_schema():
    """Schema for the enriched tornado events parquet."""
    return pa.schema([
        ('om', pa.int64()),
        ('yr', pa.int32()),
        ('mo', pa.int32()),
        ('st', pa.string()),
        ('timestamp', pa.timestamp('us')),
        ('mag', pa.int32()),
        ('inj', pa.int32()),
        ('fat', pa.int32()),
        ('cas', pa.int32()),
        ('Length', pa.float64()),
        ('Width', pa.float64()),
        ('AreaPath', pa.float64()),
        ('ED', pa.float64()),
        ('geometry', pa.binary()),
    ])


def events_to_table_frame(gdf):
    """Flatten an events GeoDataFrame into the columns of events_schema.

    Track geometry is stored as WKB in the frame's current CRS.
    """
    schema = events_schema()
    df = pd.DataFrame({
        name: gdf[name].to_numpy()
        for name in schema.names
        if name != 'geometry' and name in gdf.columns
    })
    df['geometry'] = shapely.to_wkb(gdf.geometry.to_numpy())
    return df


def save_events(gdf, output_path):
    """Write enriched events to parquet."""
    df = events_to_table_frame(gdf)
    schema = pa.schema([f for f in events_schema() if f.name in df.columns])
    return save_parquet(df, output_path, schema=schema, description="tornado events")
