"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that generates the INTERACTIVE part
on-the-fly based on the missing components of the CLI interaction, including the option that none are included.
Prompts and chatter go to stderr, so stdout stays clean for ciphertext or plaintext.

Typical usage example:

    ssutils keygen -b 512
    ssutils -n encrypt --input letter.txt --output letter.ss
    python -m ssutils -n decrypt --input letter.ss
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import contextlib
import getpass
import logging
import pathlib
import sys
import typing

import ssutils
from ssutils.ss import KEY_FORMATS

logger = logging.getLogger("ssutils")


def _whoami() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return "unknown"


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False
    optional: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in SS Utils.",
            choices=["keygen", "encrypt", "decrypt"],
        ),
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("Encryption utility."),
    "decrypt":
        HelpData("Decryption utility."),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
            default=pathlib.Path("ss.pub"),
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
            default=pathlib.Path("ss.priv"),
        ),
    "bits":
        HelpData(
            description="Size of the public modulus (in bits).",
            format=int,
            default=256,
        ),
    "iterations":
        HelpData(
            description="Number of Miller-Rabin iterations per prime candidate.",
            format=int,
            advanced=True,
            default=50,
        ),
    "seed":
        HelpData(
            description="Random seed, for reproducible keys. Unset uses system entropy.",
            format=int,
            advanced=True,
            optional=True,
        ),
    "owner":
        HelpData(
            description="Owner identity recorded in the public key.",
            advanced=True,
            default=_whoami(),
        ),
    "key_format":
        HelpData(description="Key file format.", choices=list(KEY_FORMATS), advanced=True, default="text"),
    "input":
        HelpData(
            description="File to read from, `-` for stdin.",
            advanced=True,
            default="-",
        ),
    "output":
        HelpData(
            description="File to write to, `-` for stdout.",
            advanced=True,
            default="-",
        ),
    "keep_padding":
        HelpData(
            description="Keep the zero padding of the final block? Needed for binary data ending in zero bytes.",
            choices=["Y", "N"],
            advanced=True,
            default="N",
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("public_key", "private_key", "bits", "iterations", "seed", "owner", "key_format"),
    "encrypt": ("public_key", "input", "output"),
    "decrypt": ("private_key", "input", "output", "keep_padding"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
streams = argparse.ArgumentParser(add_help=False)
streams.add_argument("--input", help=help_dict["input"].description)
streams.add_argument("--output", help=help_dict["output"].description)
corep = argparse.ArgumentParser(prog="ssutils")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {ssutils.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Log progress and key details to stderr")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--bits", "-b", type=help_dict["bits"].format, help=help_dict["bits"].description)
keygen.add_argument("--iterations",
                    "-i",
                    type=help_dict["iterations"].format,
                    help=help_dict["iterations"].description)
keygen.add_argument("--seed", "-s", type=help_dict["seed"].format, help=help_dict["seed"].description)
keygen.add_argument("--owner", "-u", help=help_dict["owner"].description)
keygen.add_argument("--format",
                    "-f",
                    dest="key_format",
                    choices=help_dict["key_format"].choices,
                    help=help_dict["key_format"].description)
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[pubkey, streams], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey, streams], help=help_dict["decrypt"].description)
decrypt.add_argument("--keep-padding",
                     "-k",
                     action="store_const",
                     const="Y",
                     help=help_dict["keep_padding"].description)


def _say(*text: str) -> None:
    print(*text, file=sys.stderr)


def _ask(prompt: str) -> str:
    print(prompt, end="", file=sys.stderr, flush=True)
    return input()


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    has_default = helper_data.default is not None or helper_data.optional
    if (mode[0] or (helper_data.advanced and not mode[1])) and has_default:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = _say):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = _ask(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = _say):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None or helper_data.optional:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = _ask(f"{arg}: ")
        if not ch and (helper_data.default is not None or helper_data.optional):
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


@contextlib.contextmanager
def open_stream(target: str, mode: str) -> typing.Iterator[typing.BinaryIO]:
    """Open a binary file, `-` standing for stdin or stdout."""
    if target == "-":
        yield sys.stdin.buffer if "r" in mode else sys.stdout.buffer
        return
    with open(target, mode) as f:
        yield f


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            _say(text)

    pspr("Welcome to SS Utils!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    try:
        match args.subcommand:
            case "keygen":
                if args.private_key.exists() or args.public_key.exists():
                    rs = getattr(args, "overwrite", None)
                    if rs is None:
                        rs = choice_handler("overwrite", pstatus, pspr)
                    if rs == "N":
                        _say("Destination private or public key already exists!")
                        return
                rng = ssutils.RandomSource(args.seed)
                rpk = ssutils.SSPrivKey.generate(args.bits, args.iterations, rng, args.owner)
                rpk.export(args.private_key, args.key_format)
                rpk.pub.export(args.public_key, args.key_format)
                logger.debug("Owner: %s", rpk.pub.owner)
                logger.debug("p (%d bits) = %d", rpk.p.bit_length(), rpk.p)
                logger.debug("q (%d bits) = %d", rpk.q.bit_length(), rpk.q)
                logger.debug("n (%d bits) = %d", rpk.pub.mod.bit_length(), rpk.pub.mod)
                logger.debug("pq (%d bits) = %d", rpk.mod.bit_length(), rpk.mod)
                logger.debug("d (%d bits) = %d", rpk.expo.bit_length(), rpk.expo)
                pspr("\nKey pair generated!")
            case "encrypt":
                rpu = ssutils.SSPubKey.import_key(args.public_key)
                logger.debug("Owner: %s", rpu.owner)
                logger.debug("n (%d bits) = %d", rpu.mod.bit_length(), rpu.mod)
                with open_stream(args.input, "rb") as fin, open_stream(args.output, "wb") as fout:
                    blocks = rpu.encrypt_stream(fin, fout)
                pspr(f"\nEncrypted {blocks} blocks!")
            case "decrypt":
                rpk = ssutils.SSPrivKey.import_key(args.private_key)
                logger.debug("pq (%d bits) = %d", rpk.mod.bit_length(), rpk.mod)
                logger.debug("d (%d bits) = %d", rpk.expo.bit_length(), rpk.expo)
                with open_stream(args.input, "rb") as fin, open_stream(args.output, "wb") as fout:
                    blocks = rpk.decrypt_stream(fin, fout, strip_padding=args.keep_padding != "Y")
                pspr(f"\nDecrypted {blocks} blocks!")
    except (OSError, ValueError) as exc:
        logger.error("%s failed: %s", args.subcommand, exc)
        sys.exit(1)
    pspr("Thank you for using SS Utils!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
