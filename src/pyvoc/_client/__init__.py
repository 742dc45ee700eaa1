"""Internal building blocks for :class:`pyvoc.client.VocClient`."""
