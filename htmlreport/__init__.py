"""Static HTML report generation for structured test-execution results."""
