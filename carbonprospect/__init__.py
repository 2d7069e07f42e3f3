"""Carbon Prospect emissions reporting core."""
