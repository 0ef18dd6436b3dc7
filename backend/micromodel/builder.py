import re

from micromodel.exceptions import ConfigurationError

ORDER_DIRECTIONS = ("ASC", "DESC")


class QueryBuilder:
    """Builds single-table SQL with named placeholders.

    Every builder returns ``(sql, params)`` where ``params`` maps placeholder
    names to values. Identifiers are validated and quoted; comparators in
    WHERE triples are inserted as given.
    """

    def __init__(self):
        self._safe_ident_pattern = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')

    def _quote(self, identifier):
        if not identifier or not self._safe_ident_pattern.match(str(identifier)):
            raise ConfigurationError(f"Unsafe SQL identifier: {identifier}")
        return f'"{identifier}"'

    def build_where(self, clauses):
        where_parts = []
        params = {}
        for clause in clauses:
            field, comparator, value = self._unpack_clause(clause)
            placeholder = field
            suffix = 1
            while placeholder in params:
                placeholder = f"{field}_{suffix}"
                suffix += 1
            where_parts.append(f"{self._quote(field)} {comparator} :{placeholder}")
            params[placeholder] = value
        return " AND ".join(where_parts), params

    def _unpack_clause(self, clause):
        if len(clause) == 2:
            field, value = clause
            return field, "=", value
        if len(clause) == 3:
            field, comparator, value = clause
            return field, str(comparator).strip(), value
        raise ConfigurationError(f"WHERE clause must be (field, comparator, value), got {clause!r}")

    def build_order_by(self, order):
        if isinstance(order, str):
            order = [term.strip() for term in order.split(",")]
        order_clauses = []
        for item in order:
            parts = item.split()
            if not parts or len(parts) > 2:
                raise ConfigurationError(f"Invalid ORDER BY term: {item!r}")
            ref = self._quote(parts[0])
            if len(parts) == 2:
                direction = parts[1].upper()
                if direction not in ORDER_DIRECTIONS:
                    raise ConfigurationError(f"Invalid ORDER BY direction: {parts[1]!r}")
                ref = f"{ref} {direction}"
            order_clauses.append(ref)
        return ", ".join(order_clauses)

    def build_select(self, table_name, where=None, order=None, columns="*"):
        sql = f"SELECT {columns} FROM {self._quote(table_name)}"
        params = {}
        if where:
            where_sql, params = self.build_where(where)
            sql += f" WHERE {where_sql}"
        if order:
            sql += f" ORDER BY {self.build_order_by(order)}"
        return sql, params

    def build_count(self, table_name, where=None):
        return self.build_select(table_name, where=where, columns="COUNT(*) AS total")

    def build_insert(self, table_name, data):
        fields = list(data.keys())
        quoted_fields = [self._quote(f) for f in fields]
        placeholders = ", ".join(f":{f}" for f in fields)
        sql = f"INSERT INTO {self._quote(table_name)} ({', '.join(quoted_fields)}) VALUES ({placeholders})"
        return sql, dict(data)

    def build_update(self, table_name, data, pk_column, pk_value):
        if pk_column in data:
            raise ConfigurationError(f"Primary key '{pk_column}' cannot be part of the SET clause")
        set_parts = [f"{self._quote(col)} = :{col}" for col in data]
        params = dict(data)
        params[pk_column] = pk_value
        sql = (
            f"UPDATE {self._quote(table_name)} SET {', '.join(set_parts)} "
            f"WHERE {self._quote(pk_column)} = :{pk_column}"
        )
        return sql, params

    def build_delete(self, table_name, criteria):
        where_sql, params = self.build_where([(col, "=", val) for col, val in criteria.items()])
        sql = f"DELETE FROM {self._quote(table_name)} WHERE {where_sql}"
        return sql, params
