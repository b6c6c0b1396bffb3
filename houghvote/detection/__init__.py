"""Parameter spaces, voting engines and the line/circle detectors."""
