"""LinkedIn Profile Extractor.

Extracts a LinkedIn profile (identity, experiences, educations,
certifications and skills with their endorsers) from a browser-rendered
profile page.
"""

__version__ = "0.1.0"
