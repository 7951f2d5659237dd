"\"\"\"Hiring analytics engine: score discrepancy, weekly trends and breakdowns.\"\"\""

__version__ = "0.1.0"
