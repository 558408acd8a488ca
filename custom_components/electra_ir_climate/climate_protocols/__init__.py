"""Climate IR protocols."""
from .electra import ElectraProtocol

PROTOCOL_MAP = {'electra': ElectraProtocol}

def get_protocol(brand, **options):
    if brand in PROTOCOL_MAP:
        return PROTOCOL_MAP[brand](**options)
    raise ValueError(f"Unsupported climate brand: {brand}")
