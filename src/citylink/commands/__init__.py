"""Click plumbing for the citylink command: base class, context, parameter types."""
