from __future__ import annotations

"""
Punto de entrada de consola.

Sin argumentos muestra un menú interactivo; con argumentos ejecuta
directamente el comando:

  cinelaunch list
  cinelaunch pull
  cinelaunch export [DIRECTORIO]
  cinelaunch open ID
"""

import sys
from collections.abc import Sequence
from typing import Literal

from cinelaunch.app import App, build_app
from cinelaunch.sync_client import SyncOutcome, export_sync_package
from cinelaunch.taxonomy import label

Command = Literal["list", "pull", "export", "open"]

_MENU: dict[str, Command] = {"1": "list", "2": "pull", "3": "export"}


def _ask_command() -> Command:
    prompt = (
        "¿Qué quieres hacer?\n"
        "  1) Listar el catálogo\n"
        "  2) Sincronizar desde la URL remota\n"
        "  3) Exportar paquete de sincronización\n"
        "Selecciona una opción (1/2/3): "
    )
    while True:
        answer = input(prompt).strip()
        if answer in _MENU:
            return _MENU[answer]
        print("Opción no válida. Introduce 1, 2 o 3.")


def cmd_list(app: App) -> int:
    entries = app.store.entries
    if not entries:
        print("El catálogo está vacío.")
        return 0
    for e in entries:
        print(f"{e.id}  [{e.language} / {label(e.language, e.genre)}]  {e.title}")
        print(f"      {e.external_link}")
    return 0


def cmd_pull(app: App) -> int:
    if app.state.is_admin:
        print("Modo Admin: este dispositivo es el escritor y no hace pull.")
        return 1
    if not app.state.remote_url:
        print("No hay URL remota configurada (CINELAUNCH_REMOTE_URL).")
        return 1

    outcome = app.scheduler.run()
    if outcome is SyncOutcome.APPLIED:
        print(f"Sincronizado: {len(app.store)} entrada(s).")
        return 0
    print("Sincronización omitida; se conserva el catálogo local.")
    return 1


def cmd_export(app: App, directory: str = ".") -> int:
    if not app.gate.is_admin:
        print("Exportar requiere modo Admin.")
        return 1
    try:
        path = export_sync_package(app.store.entries, directory)
    except OSError as exc:
        print(f"No se pudo exportar: {exc}")
        return 1
    print(f"Paquete escrito en {path}. Súbelo a tu hosting y pega su URL en los Viewer.")
    return 0


def cmd_open(app: App, entry_id: str) -> int:
    if not app.service.launch(entry_id):
        print(f"No existe la entrada {entry_id}.")
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Punto de entrada principal. Devuelve el código de salida."""
    args = list(sys.argv[1:] if argv is None else argv)
    command: str = args[0] if args else _ask_command()
    rest = args[1:]

    app = build_app()

    if command == "list":
        return cmd_list(app)
    if command == "pull":
        return cmd_pull(app)
    if command == "export":
        return cmd_export(app, rest[0] if rest else ".")
    if command == "open":
        if not rest:
            print("Uso: cinelaunch open ID")
            return 1
        return cmd_open(app, rest[0])

    print(f"Comando no reconocido: {' '.join(args)}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
