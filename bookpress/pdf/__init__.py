"""Layout, imposition, and PDF drawing for bookpress."""
