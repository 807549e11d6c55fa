from sqlfront.sql import Document, FormatOptions, format_sql, get_symbols, references_table
from sqlfront.utils.tabulate import tabulate

SOURCE = """
create or replace procedure sample.raise_salary(in pct int) begin
  declare done int default 0; declare c1 cursor for select id, salary from sample.employee where dept in ('A00', 'B01', 'C01');
  if pct > 10 then signal sqlstate '75001'; else update sample.employee set salary = salary * (1 + pct / 100.0); end if;
end;
create table sample.audit (id int, changed timestamp, note varchar(100));
"""

print(format_sql(SOURCE, FormatOptions(keyword_case="upper", space_between_statements=True)))
print()

doc = Document(SOURCE)
for symbol in get_symbols(doc):
    print(symbol.kind, symbol.name, symbol.detail)
    for child in symbol.children:
        print("  ", child.kind, child.name, child.detail)
print()

print(tabulate(references_table(doc)))
