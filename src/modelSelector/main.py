#!/usr/bin/env python3
"""
modelSelector v1.0 - 逻辑回归模型比较

支持两种模式：
- compare: 交叉验证 + AICc 排名 + 最终模型选择
- pca: 食物营养成分主成分分析
"""

import sys
import os
import traceback
from datetime import datetime
from typing import Optional, Sequence

from modelSelector.cli.argument_parser import parse_arguments
from modelSelector.core.exceptions import LoadError
from modelSelector.utils.helpers import format_time


def main(argv: Optional[Sequence[str]] = None) -> None:
    """主入口函数，根据命令分发到相应的处理器。"""
    args = parse_arguments(argv)

    # 命令处理器映射
    handlers = {
        'compare': lambda a: __import__('modelSelector.pipelines.compare', fromlist=['handle_compare']).handle_compare(a),
        'pca': lambda a: __import__('modelSelector.pipelines.pca', fromlist=['handle_pca']).handle_pca(a),
    }

    cmd = getattr(args, 'command', None)
    handler = handlers.get(cmd)

    if handler is None:
        raise ValueError(f"Unknown command: {cmd}. Supported commands: {', '.join(handlers.keys())}")

    start_time = datetime.now()
    sys.stdout.write(f"================================================================================\n"
                     f"modelSelector 运行日志\n"
                     f"================================================================================\n"
                     f"开始时间: {start_time.strftime('%Y-%m-%d %H:%M:%S')}\n"
                     f"命令: {cmd.upper()}\n"
                     f"工作目录: {os.getcwd()}\n"
                     f"================================================================================\n")
    sys.stdout.flush()

    try:
        handler(args)
    except KeyboardInterrupt:
        sys.stdout.write(f"\n⚠️ {cmd.upper()} 命令被用户中断\n")
        sys.exit(130)
    except (FileNotFoundError, LoadError) as e:
        sys.stdout.write(f"\n❌ 数据加载失败: {e}\n")
        _print_traceback(args)
        sys.exit(2)
    except ValueError as e:
        sys.stdout.write(f"\n❌ 参数错误: {e}\n")
        _print_traceback(args)
        sys.exit(3)
    except Exception as e:
        sys.stdout.write(f"\n❌ {cmd.upper()} 命令执行失败: {e}\n")
        _print_traceback(args)
        sys.exit(1)

    end_time = datetime.now()
    sys.stdout.write(f"\n✅ {cmd.upper()} 命令执行完成！\n"
                     f"结束时间: {end_time.strftime('%Y-%m-%d %H:%M:%S')}\n"
                     f"总耗时: {format_time((end_time - start_time).total_seconds())}\n"
                     f"================================================================================\n")
    sys.stdout.flush()


def _print_traceback(args) -> None:
    # 详细模式下打印完整错误信息
    if getattr(args, 'verbose', None):
        sys.stdout.write("\n详细错误信息:\n")
        traceback.print_exc(file=sys.stdout)


if __name__ == "__main__":
    main()
