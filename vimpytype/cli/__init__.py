"""Terminal host for VimpyType (typer commands, rich rendering)."""
