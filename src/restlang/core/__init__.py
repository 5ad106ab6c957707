"""
restlang core: normalizer, tokenizer, scope stack, document builder and IR.
"""
