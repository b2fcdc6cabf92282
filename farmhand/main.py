from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from farmhand.catalog import UnknownItemError, default_catalog
from farmhand.config import GameConfig
from farmhand.cows import get_cow_value, get_cow_weight
from farmhand.crops import get_crop_life_stage
from farmhand.field import iter_plots
from farmhand.game import Game
from farmhand.levels import get_player_level, get_shop_inventory
from farmhand.pricing import get_adjusted_item_value
from farmhand.save_state import SaveError

_PLOT_GLYPHS = {"scarecrow": "S", "sprinkler": "*", "shoveled": "#"}
_STAGE_GLYPHS = {"seed": ".", "growing": "v", "grown": "Y"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="farmhand",
        description="Play a farm from the command line, one action per invocation.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--save", type=Path, default=None, help="Save file to read and write")
    parser.add_argument("--config", type=Path, default=None, help="JSON game config")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log pipeline stages")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("new", help="Start a new farm, replacing the save file")
    sub.add_parser("status", help="Show money, inventory, field and cows")
    sub.add_parser("end-day", help="Sleep and advance to the next day")
    sub.add_parser("water-all", help="Water every crop")

    for name, help_text in (
        ("harvest", "Harvest a grown crop"),
        ("water", "Water around a plot"),
        ("clear", "Clear a plot"),
        ("scarecrow", "Place a scarecrow"),
        ("sprinkler", "Place a sprinkler"),
        ("mine", "Dig up a plot"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("x", type=int)
        cmd.add_argument("y", type=int)

    for name, help_text in (("plant", "Plant a seed"), ("fertilize", "Fertilize a crop")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("x", type=int)
        cmd.add_argument("y", type=int)
        cmd.add_argument("item_id")

    for name, help_text in (("buy", "Buy items from the shop"), ("sell", "Sell items to the shop")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("item_id")
        cmd.add_argument("quantity", nargs="?", default="1", help="A number or 'max'/'all'")

    loan = sub.add_parser("loan", help="Take out or repay a loan")
    loan.add_argument("action", choices=("take", "repay"))
    loan.add_argument("amount", type=float)

    sub.add_parser("buy-cow", help="Buy the cow for sale")
    for name, help_text in (
        ("sell-cow", "Sell a cow"),
        ("hug", "Hug a cow"),
        ("offer", "Offer a cow for trade"),
        ("withdraw", "Withdraw a cow from trade"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("cow_id")

    rename = sub.add_parser("rename", help="Rename a cow")
    rename.add_argument("cow_id")
    rename.add_argument("name")

    hug_machine = sub.add_parser("hug-machine", help="Attach or detach a hugging machine")
    hug_machine.add_argument("cow_id")
    hug_machine.add_argument("state", choices=("on", "off"))

    breed = sub.add_parser("breed", help="Move a cow into or out of the breeding pen")
    breed.add_argument("cow_id")
    breed.add_argument("action", choices=("add", "remove"))

    cook = sub.add_parser("cook", help="Make a learned recipe")
    cook.add_argument("recipe_id")
    cook.add_argument("quantity", type=int, nargs="?", default=1)

    upgrade = sub.add_parser("upgrade", help="Upgrade a tool with ingots")
    upgrade.add_argument("tool", choices=("hoe", "scythe", "shovel", "watering_can"))

    expand = sub.add_parser("expand", help="Buy more field, storage or equipment")
    expand.add_argument("what", choices=("field", "storage", "cow-pen", "combine", "smelter"))
    expand.add_argument("level", type=int, nargs="?", default=1)
    return parser


def _print_status(game: Game) -> None:
    state = game.state
    catalog = default_catalog()
    print(
        f"day {state['day_count']}  money=${state['money']:,.2f}  loan=${state['loan_balance']:,.2f}  "
        f"level={get_player_level(state)}  exp={state['experience']}"
    )

    field = state["field"]
    grid = [["_" for _ in row] for row in field]
    for x, y, plot in iter_plots(state):
        if plot["type"] == "crop":
            grid[y][x] = _STAGE_GLYPHS[get_crop_life_stage(plot)]
        else:
            grid[y][x] = _PLOT_GLYPHS.get(plot["type"], "?")
    print("field:")
    for row in grid:
        print("  " + " ".join(row))

    limit = state["inventory_limit"]
    used = sum(entry["quantity"] for entry in state["inventory"])
    print(f"inventory ({used}/{'unlimited' if limit == -1 else limit}):")
    for entry in state["inventory"]:
        print(f"  {catalog.item(entry['id']).name} x {entry['quantity']}")

    print("shop:")
    for item_id in get_shop_inventory(state):
        value = get_adjusted_item_value(state["value_adjustments"], item_id)
        print(f"  {item_id}: ${value:,.2f}")

    if state["cow_inventory"]:
        pen = state["cow_breeding_pen"]
        print("cows:")
        for cow in state["cow_inventory"]:
            tags = []
            if cow.get("is_using_hugging_machine"):
                tags.append("hugging-machine")
            if cow["id"] in (pen["cow_id_1"], pen["cow_id_2"]):
                tags.append("breeding")
            if cow["id"] == state["cow_id_offered_for_trade"]:
                tags.append("offered")
            print(
                f"  {cow['id']} {cow['name']} ({cow['color']} {cow['gender']}) "
                f"{get_cow_weight(cow)} lbs happiness={cow['happiness']:.0%} "
                f"sells for ${get_cow_value(cow, True):,.2f}" + (f" [{', '.join(tags)}]" if tags else "")
            )
    cow = state["cow_for_sale"]
    print(f"cow for sale: {cow['name']} ({cow['color']} {cow['gender']}) ${get_cow_value(cow):,.2f}")

    for notification in state["todays_notifications"]:
        print(f"[{notification['severity']}] {notification['message']}")


def _quantity(raw: str) -> int | None:
    """Parse a quantity argument; None means as many as possible."""
    if raw.lower() in ("max", "all"):
        return None
    return int(raw)


def run_command(game: Game, args: argparse.Namespace) -> None:
    command = args.command
    if command == "end-day":
        game.increment_day()
    elif command == "water-all":
        game.water_all()
    elif command == "plant":
        game.plant(args.x, args.y, args.item_id)
    elif command == "fertilize":
        game.fertilize(args.x, args.y, args.item_id)
    elif command == "harvest":
        game.harvest(args.x, args.y)
    elif command == "water":
        game.water(args.x, args.y)
    elif command == "clear":
        game.clear(args.x, args.y)
    elif command == "scarecrow":
        game.place_scarecrow(args.x, args.y)
    elif command == "sprinkler":
        game.place_sprinkler(args.x, args.y)
    elif command == "mine":
        game.mine(args.x, args.y)
    elif command == "buy":
        quantity = _quantity(args.quantity)
        if quantity is None:
            game.buy_max(args.item_id)
        else:
            game.buy(args.item_id, quantity)
    elif command == "sell":
        quantity = _quantity(args.quantity)
        if quantity is None:
            game.sell_all(args.item_id)
        else:
            game.sell(args.item_id, quantity)
    elif command == "loan":
        if args.action == "take":
            game.take_loan(args.amount)
        else:
            game.repay_loan(args.amount)
    elif command == "buy-cow":
        game.buy_cow()
    elif command == "sell-cow":
        game.sell_cow(args.cow_id)
    elif command == "hug":
        game.hug_cow(args.cow_id)
    elif command == "rename":
        game.rename_cow(args.cow_id, args.name)
    elif command == "hug-machine":
        game.set_automatic_hugging(args.cow_id, args.state == "on")
    elif command == "breed":
        game.set_breeding(args.cow_id, args.action == "add")
    elif command == "offer":
        game.offer_cow(args.cow_id)
    elif command == "withdraw":
        game.withdraw_cow(args.cow_id)
    elif command == "cook":
        game.cook(args.recipe_id, args.quantity)
    elif command == "upgrade":
        game.upgrade_tool(args.tool)
    elif command == "expand":
        if args.what == "field":
            game.buy_field(args.level)
        elif args.what == "storage":
            game.expand_storage()
        elif args.what == "cow-pen":
            game.buy_cow_pen(args.level)
        elif args.what == "combine":
            game.buy_combine()
        else:
            game.buy_smelter()


def main(argv: list[str] | None = None) -> int:
    """Run one CLI command against a save file."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = GameConfig.from_json_file(args.config) if args.config else GameConfig()
        save_path = args.save or config.save_path
        if args.command == "new":
            game = Game.new(config, save_path)
            game.save()
            _print_status(game)
            return 0

        game = Game.load(save_path, config)
        if args.command != "status":
            run_command(game, args)
            if args.command != "end-day":
                game.save()
        _print_status(game)
    except (UnknownItemError, SaveError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
