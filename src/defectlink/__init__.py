"""defectlink — decode static-analysis reports and link defects to external IDs."""

__version__ = "0.1.0"
