"""
Domain Layer - Rules and Validation

This layer contains:
- Entities: rules, results and the validation context
- Rules: concrete rule kinds (null checks, ranges, equality, faults)
- Exceptions: argument, reentrancy and the designated unit-of-work fault

No external dependencies allowed in this layer.
"""
