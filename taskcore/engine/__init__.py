"""taskcore Engine — config, context, errors, logging, clock."""
