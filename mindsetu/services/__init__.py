"""Engine services: action resolution, check-in flow and aggregations."""
