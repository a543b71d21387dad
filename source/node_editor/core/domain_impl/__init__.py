"""Domain implementation pillars: json, infra, support, ui."""
