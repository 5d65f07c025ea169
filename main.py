import os

from tools import (
    call_admin,
    clean_summary_titles,
    clear_cache,
    db_status,
    fix_player_names,
    generate_sitemap,
    inspect_schema,
    normalize_titles,
)
from util.logger import BLUE, BOLD, CYAN, RED, RESET, WHITE


def clear_screen():
    os.system("cls" if os.name == "nt" else "clear")


def _confirm(prompt: str) -> bool:
    return input(f"{CYAN}{prompt} [y/N]:{RESET} ").strip().lower() in ("y", "yes")


def _run_fix_player_names():
    fix_player_names.main([])
    if _confirm("Apply these player-name changes?"):
        fix_player_names.main(["--apply", "--show", "0"])


def _run_clean_summary_titles():
    mode = input(f"{CYAN}Mode (clean/rebuild) [clean]:{RESET} ").strip().lower() or "clean"
    if mode not in ("clean", "rebuild"):
        print(f"{RED}Unknown mode.{RESET}")
        return
    clean_summary_titles.main(["--mode", mode])
    if _confirm("Apply these summary-title changes?"):
        clean_summary_titles.main(["--mode", mode, "--apply", "--show", "0"])


def _run_normalize_title():
    title = input(f"{CYAN}Listing title:{RESET} ").strip()
    if title:
        normalize_titles.main(["--title", title])


def _run_call_admin():
    call_admin.print_endpoints()
    tasks = input(f"{CYAN}Task name(s), space separated:{RESET} ").split()
    if tasks:
        call_admin.main(tasks)


MENU = [
    ("1", "Database status", lambda: db_status.main([])),
    ("2", "Inspect database schema", lambda: inspect_schema.main([])),
    ("3", "Fix player names", _run_fix_player_names),
    ("4", "Clean / rebuild summary titles", _run_clean_summary_titles),
    ("5", "Debug one listing title", _run_normalize_title),
    ("6", "Clear Redis cache", lambda: clear_cache.main([])),
    ("7", "Generate sitemap.xml", lambda: generate_sitemap.main([])),
    ("8", "Call remote admin task", _run_call_admin),
]


def run_menu():
    while True:
        clear_screen()
        print("\n")
        print(f"{BOLD}{CYAN}SCORECARD {RESET}{BOLD}{WHITE}–{RESET} {BOLD}{CYAN}MAINTENANCE MENU{RESET}")
        print(f"{BLUE}{'=' * 33}{RESET}")
        print(f"{CYAN}{BOLD}Make your selection:{RESET}")
        for key, label, _ in MENU:
            print(f"{BLUE}{key}){RESET} {BOLD}{label}{RESET}")
        print(f"{BLUE}X){RESET} {BOLD}Exit{RESET}")

        choice = input(f"{CYAN}Enter choice:{RESET} ").strip().lower()

        if choice == "x":
            print(f"{WHITE}Exiting.{RESET}")
            return

        action = next((fn for key, _, fn in MENU if key == choice), None)
        if action is None:
            print(f"{RED}Invalid selection. Try again.{RESET}")
        else:
            clear_screen()
            try:
                action()
            except SystemExit:
                # argparse exits on bad input; stay in the menu
                pass
        input("\nPress Enter to continue...")


if __name__ == "__main__":
    run_menu()
