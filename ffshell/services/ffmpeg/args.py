# ffshell/services/ffmpeg/args.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ffshell.domain.entities.command import ArgumentList


class ArgumentBuilder:
    """
    Ordered builder for one ffmpeg command line.

    Tokens are collected per stage and emitted in a fixed order no matter
    which method was called first:

        <global> (<pre-input> -i <input>)* <filters> <maps> <output options> <output>

    Pre-input options belong to the input they are passed with, so
    `.input(src, "-ss", "10")` seeks that input (fast seek), while
    `.output_option("-ss", "10")` decodes up to the point (accurate seek).
    """

    def __init__(self, binary: str, global_args: Sequence[str] = ()) -> None:
        self._binary = str(binary)
        self._global: List[str] = [str(t) for t in global_args]
        self._inputs: List[List[str]] = []
        self._video_filters: List[str] = []
        self._audio_filters: List[str] = []
        self._filter_complex: Optional[str] = None
        self._maps: List[str] = []
        self._output: List[str] = []

    @classmethod
    def for_ffmpeg(
        cls,
        binary: str = "ffmpeg",
        *,
        overwrite: bool = False,
        log_level: Optional[str] = "error",
        hide_banner: bool = True,
    ) -> "ArgumentBuilder":
        g: List[str] = []
        if hide_banner:
            g.append("-hide_banner")
        if log_level:
            g += ["-loglevel", log_level]
        # never wait on a terminal prompt
        g.append("-nostdin")
        g.append("-y" if overwrite else "-n")
        return cls(binary, g)

    # ---- stages -------------------------------------------------------------
    def global_option(self, *tokens: object) -> "ArgumentBuilder":
        self._global += [str(t) for t in tokens]
        return self

    def input(self, path: str | Path, *pre_input: object) -> "ArgumentBuilder":
        self._inputs.append([*(str(t) for t in pre_input), "-i", str(path)])
        return self

    def video_filter(self, expr: str) -> "ArgumentBuilder":
        if expr:
            self._video_filters.append(expr)
        return self

    def audio_filter(self, expr: str) -> "ArgumentBuilder":
        if expr:
            self._audio_filters.append(expr)
        return self

    def filter_complex(self, graph: str) -> "ArgumentBuilder":
        self._filter_complex = graph
        return self

    def map(self, *specs: str) -> "ArgumentBuilder":
        for s in specs:
            self._maps += ["-map", str(s)]
        return self

    def output_option(self, *tokens: object) -> "ArgumentBuilder":
        self._output += [str(t) for t in tokens if t is not None]
        return self

    @property
    def input_count(self) -> int:
        return len(self._inputs)

    # ---- result -------------------------------------------------------------
    def build(self, output: str | Path | None = None) -> ArgumentList:
        if self._filter_complex and self._video_filters:
            raise ValueError("cannot combine -vf with -filter_complex; put the chain into the graph")

        tokens: List[str] = list(self._global)
        for chunk in self._inputs:
            tokens += chunk
        if self._filter_complex:
            tokens += ["-filter_complex", self._filter_complex]
        if self._video_filters:
            tokens += ["-vf", ",".join(self._video_filters)]
        if self._audio_filters:
            tokens += ["-af", ",".join(self._audio_filters)]
        tokens += self._maps
        tokens += self._output
        if output is not None:
            tokens.append(str(output))
        return ArgumentList(binary=self._binary, tokens=tuple(tokens))
