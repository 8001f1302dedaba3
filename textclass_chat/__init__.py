"""Chat backend that classifies Vietnamese news text through a remote classifier."""
