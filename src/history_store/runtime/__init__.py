"""Runtime services shared by history stores and adapters."""
