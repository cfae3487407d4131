from trackmycoin.domain.enums.offset import PriceOffset

__all__ = ["PriceOffset"]
