from backoffice.domain.pos.util.di.provider import PosProvider

__all__ = ["PosProvider"]
