# The registry of transition search strategies, in registration order
STRATEGY_REGISTRY = {}

def register_strategy(kind: str):
    def deco(fn):
        STRATEGY_REGISTRY[kind] = fn
        return fn
    return deco
