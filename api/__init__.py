"""HTTP surface for the skirmish simulator."""
