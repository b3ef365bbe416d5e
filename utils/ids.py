"""Generátor unikátních ID pro prvky diagramu."""
import itertools
import time


# Čítač zajišťuje unikátnost i pro ID vygenerovaná ve stejné milisekundě
_id_counter = itertools.count(1)

def next_id(prefix: str) -> str:
    """
    Vygeneruje nové unikátní ID s daným prefixem.

    ID se nikdy neopakuje v rámci běhu aplikace, takže ani po undo/redo
    nemůže dojít ke kolizi s ID, které už bylo jednou použito.

    Args:
        prefix: Prefix ID ("node" nebo "edge")

    Returns:
        ID ve formátu "{prefix}_{milisekundy}_{číslo}" (např. "node_1718000000000_3")
    """
    return f"{prefix}_{int(time.time() * 1000)}_{next(_id_counter)}"
