"""BtcTurk trading client: exchange metadata, pre-trade validation, and request signing."""
