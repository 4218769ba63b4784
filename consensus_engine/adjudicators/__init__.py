"""Rule-based adjudicators: evidence tiers, experts, consensus and honesty."""
