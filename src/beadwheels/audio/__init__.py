"""Volume analysis, audio sources and parameter mapping."""
