"""
Download SPC tornado track archives and extract their shapefiles.

Two archives are fetched from the Storm Prediction Center GIS page:
1. 1950-2017-torn-aspath.zip - tornado paths (linestrings)
2. 1950-2017-torn-initpoint.zip - touchdown points

Archives are removed once extracted. Without a configured data directory
everything lands in a temporary directory that is removed when the
acquire_* context exits, whether or not the run succeeded.
"""
import shutil
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path

import requests

from ..base.constants import PATHS_URL, POINTS_URL, STATES_URL, TIMEOUT
from ..errors import AcquisitionError
from ..logging_config import logger

CHUNK_SIZE = 8192


def download_file(url, output_path, timeout=TIMEOUT):
    """Stream a URL to output_path.

    Raises:
        AcquisitionError: the request or the local write failed
    """
    output_path = Path(output_path)
    logger.info(f"Downloading: {url}")

    try:
        with requests.get(url, timeout=timeout, stream=True) as response:
            response.raise_for_status()

            downloaded = 0
            with open(output_path, 'wb') as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        downloaded += len(chunk)
    except (requests.exceptions.RequestException, OSError) as e:
        if output_path.is_file():
            output_path.unlink()
        raise AcquisitionError(f"Failed to download {url}: {e}") from e

    logger.info(f"  Downloaded: {downloaded / (1024 * 1024):.1f} MB -> {output_path.name}")
    return output_path


def extract_shapefile(zip_path, out_dir=None):
    """Extract a zip archive, delete it, and return the .shp it contained.

    Raises:
        AcquisitionError: archive cannot be extracted or holds no shapefile
    """
    zip_path = Path(zip_path)
    out_dir = Path(out_dir) if out_dir else zip_path.parent

    try:
        with zipfile.ZipFile(zip_path, 'r') as zip_ref:
            names = zip_ref.namelist()
            zip_ref.extractall(out_dir)
    except (zipfile.BadZipFile, OSError) as e:
        raise AcquisitionError(f"Failed to extract {zip_path.name}: {e}") from e
    finally:
        zip_path.unlink(missing_ok=True)

    shp_names = [n for n in names if n.lower().endswith('.shp')]
    if not shp_names:
        raise AcquisitionError(f"No shapefile found in {zip_path.name}")

    shp_path = out_dir / shp_names[0]
    logger.info(f"  Extracted: {shp_path}")
    return shp_path


def fetch_shapefile(url, work_dir, timeout=TIMEOUT):
    """Download one archive into work_dir and return its extracted .shp path.

    An already-extracted shapefile in work_dir is reused.
    """
    work_dir = Path(work_dir)
    work_dir.mkdir(parents=True, exist_ok=True)

    archive_name = url.rsplit('/', 1)[-1]
    stem = archive_name[:-len('.zip')] if archive_name.endswith('.zip') else archive_name

    existing = sorted(work_dir.glob(f"**/{stem}.shp"))
    if existing:
        logger.info(f"  OK {stem}: already extracted")
        return existing[0]

    zip_path = download_file(url, work_dir / archive_name, timeout=timeout)
    return extract_shapefile(zip_path, work_dir)


@contextmanager
def _work_dir(data_dir):
    if data_dir:
        yield Path(data_dir)
        return

    tmp_dir = Path(tempfile.mkdtemp(prefix="tornado_tracks_"))
    try:
        yield tmp_dir
    finally:
        shutil.rmtree(tmp_dir, ignore_errors=True)
        logger.info(f"Removed temporary directory {tmp_dir}")


@contextmanager
def acquire_track_shapefiles(ctx):
    """Yield (paths_shp, points_shp) for the run.

    Local shapefiles configured on the context are used as-is; otherwise
    both SPC archives are downloaded and extracted. A half-configured pair
    is ignored with a warning.
    """
    if ctx.has_local_tracks:
        logger.info("Using local track shapefiles")
        yield ctx.paths_shp, ctx.points_shp
        return

    if ctx.paths_shp is not None or ctx.points_shp is not None:
        configured = 'paths_shp' if ctx.paths_shp is not None else 'points_shp'
        logger.warning(
            f"Only {configured} is set; local tracks need both paths_shp and "
            f"points_shp. Downloading both SPC archives instead"
        )

    with _work_dir(ctx.data_dir) as work_dir:
        paths_shp = fetch_shapefile(PATHS_URL, work_dir, timeout=ctx.timeout)
        points_shp = fetch_shapefile(POINTS_URL, work_dir, timeout=ctx.timeout)
        yield paths_shp, points_shp


@contextmanager
def acquire_states_shapefile(ctx):
    """Yield the path of a state boundary shapefile."""
    if ctx.states_shp:
        yield ctx.states_shp
        return

    with _work_dir(ctx.data_dir) as work_dir:
        yield fetch_shapefile(STATES_URL, work_dir, timeout=ctx.timeout)
