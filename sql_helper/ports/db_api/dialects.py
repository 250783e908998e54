"""SQL Server statement building and driver value binding."""

from __future__ import annotations

import uuid
from typing import Any, List, Sequence, Tuple

from ...core.parameters import DbParameter, SqlType, StructuredRow


class SqlServerDialect:
    """SQL Server dialect (`?` parameters bound by name through `EXEC`)."""

    name: str = "mssql"
    paramstyle: str = "qmark"
    default_schema: str = "dbo"

    def q(self, ident: str) -> str:
        """Bracket-quote a possibly schema-qualified identifier."""

        return ".".join(self._quote_part(part) for part in self._split_ident(ident))

    def placeholder(self) -> str:
        return "?"

    def procedure_call(self, procedure_name: str, parameter_names: Sequence[str]) -> str:
        """Return an `EXEC` statement binding each parameter by name.

        Example:
            `EXEC [UPDATE_USER] @UserData = ?`
        """

        sql = f"EXEC {self.q(procedure_name)}"
        if parameter_names:
            assignments = ", ".join(
                f"{self.parameter_name(name)} = {self.placeholder()}"
                for name in parameter_names
            )
            sql = f"{sql} {assignments}"
        return sql

    def parameter_name(self, name: str) -> str:
        return name if name.startswith("@") else f"@{name}"

    def split_type_name(self, type_name: str) -> Tuple[str, str]:
        """Split `[schema].[type]` into `(schema, type)`."""

        parts = [part.strip("[]") for part in self._split_ident(type_name)]
        if len(parts) == 1:
            return self.default_schema, parts[0]
        if len(parts) == 2:
            return parts[0], parts[1]
        raise ValueError(f"Unsupported table type name: {type_name!r}")

    def bind_value(self, parameter: DbParameter) -> Any:
        """Convert a parameter value into the form the driver expects.

        Structured parameters become pyodbc's table-valued form: a list whose
        first two items are the type name and schema, followed by one tuple
        per row.
        """

        if not parameter.is_structured:
            return self.bind_scalar(parameter.value)
        schema, type_name = self.split_type_name(parameter.type_name)
        tvp: List[Any] = [type_name, schema]
        tvp.extend(self._bind_row(row) for row in parameter.value)
        return tvp

    def bind_scalar(self, value: Any) -> Any:
        if isinstance(value, uuid.UUID):
            return str(value)
        return value

    def _bind_row(self, row: Any) -> Tuple[Any, ...]:
        if not isinstance(row, StructuredRow):
            return tuple(self.bind_scalar(value) for value in row)
        return tuple(
            self._bind_cell(column.sql_type, value)
            for column, value in zip(row.columns, row.values)
        )

    def _bind_cell(self, sql_type: SqlType, value: Any) -> Any:
        if value is None:
            return None
        if sql_type is SqlType.UNIQUEIDENTIFIER:
            return str(value if isinstance(value, uuid.UUID) else uuid.UUID(str(value)))
        if sql_type in (SqlType.NVARCHAR, SqlType.VARCHAR):
            return str(value)
        return value

    def _split_ident(self, ident: str) -> List[str]:
        parts: List[str] = []
        current = ""
        in_brackets = False
        i = 0
        while i < len(ident):
            ch = ident[i]
            if in_brackets:
                current += ch
                if ch == "]":
                    if ident[i + 1 : i + 2] == "]":
                        current += "]"
                        i += 1
                    else:
                        in_brackets = False
            elif ch == "[":
                in_brackets = True
                current += ch
            elif ch == ".":
                parts.append(current)
                current = ""
            else:
                current += ch
            i += 1
        parts.append(current)
        if any(not part for part in parts):
            raise ValueError(f"Invalid SQL identifier: {ident!r}")
        return parts

    def _quote_part(self, part: str) -> str:
        if part.startswith("[") and part.endswith("]") and len(part) > 1:
            return part
        return "[" + part.replace("]", "]]") + "]"
