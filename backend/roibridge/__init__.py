"""roibridge: ROI, metadata and channel-settings exchange with a remote image server."""

__version__ = "0.1.0"
