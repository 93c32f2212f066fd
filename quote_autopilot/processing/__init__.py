"""Classification, heuristic and AI extraction, and the invoice factory."""
