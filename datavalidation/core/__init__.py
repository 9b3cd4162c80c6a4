"""
Rule interpretation core: models, validators, rules, records and engine.
"""
