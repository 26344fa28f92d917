"""Business services coordinating repositories and domain rules."""
