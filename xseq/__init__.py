"""xseq — narzędzie CLI do prowadzenia procedur (runbooków) krok po kroku."""

__version__ = "0.1.0"
