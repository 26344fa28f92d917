"""Domain entities, rules, and errors for the CRM platform."""
