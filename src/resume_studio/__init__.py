"""resume-studio: AI resume builder and ATS analyzer with a PDF document pipeline."""
