"""Track the aircraft closest to a fixed observer from a dump1090 feed."""
