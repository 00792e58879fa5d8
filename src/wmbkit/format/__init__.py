"""WMB7 binary format: layout constants, byte source and section decoders."""
