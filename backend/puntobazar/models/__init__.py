from .auth import Usuario
from .resellers import Revendedor
from .campaigns import Campania
from .inventory import Producto
from .customers import Cliente
from .sales import Venta

__all__ = [
    'Usuario',
    'Revendedor',
    'Campania',
    'Producto',
    'Cliente',
    'Venta',
]
