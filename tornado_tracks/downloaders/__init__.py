"""Archive download and extraction for SPC tornado data."""
