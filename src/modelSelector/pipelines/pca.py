#!/usr/bin/env python3
"""
营养成分主成分分析流水线 for modelSelector v1.0.
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict

from modelSelector.analysis.pca import NutrientPCA
from modelSelector.data.loader import DataLoader
from modelSelector.evaluation.reporter import ResultsReporter
from modelSelector.evaluation.visualizer import ResultsVisualizer
from modelSelector.config.default_config import DEFAULT_CONFIG
from modelSelector.utils.config import Config, ConfigManager
from modelSelector.utils.helpers import ensure_directory
from modelSelector.utils.logger import get_logger, setup_logging


def build_config(args: argparse.Namespace) -> Config:
    """默认值 < 配置文件 < 命令行参数。"""
    manager = ConfigManager()
    if getattr(args, 'config', None):
        manager.load_from_file(args.config)
    manager.update_config(
        data_file=args.data_file,
        output_dir=args.output,
        verbose=getattr(args, 'verbose', None),
    )
    config = manager.get_config()

    overrides = {
        'food_groups': getattr(args, 'food_groups', None),
        'columns': getattr(args, 'columns', None),
        'n_components': getattr(args, 'n_components', None),
        'scale': getattr(args, 'scale', None),
    }
    config.pca.update({key: value for key, value in overrides.items() if value is not None})
    return config


def handle_pca(args: argparse.Namespace) -> Dict[str, Any]:
    """处理pca命令：加载营养成分表，运行PCA并保存结果。"""
    config = build_config(args)
    output_dir = ensure_directory(config.output_dir)

    file_handler = setup_logging(
        level=logging.DEBUG if config.verbose else logging.INFO,
        log_file=output_dir / DEFAULT_CONFIG["logging"]["file"],
        log_format=DEFAULT_CONFIG["logging"]["format"],
    )
    try:
        return run_pca(config, output_dir, plots=getattr(args, 'plots', True))
    finally:
        if file_handler is not None:
            logging.getLogger().removeHandler(file_handler)
            file_handler.close()


def run_pca(config: Config, output_dir: Path, plots: bool = True) -> Dict[str, Any]:
    logger = get_logger("PCAPipeline")
    logger.info("开始PCA流水线...")

    if not config.data_file:
        raise ValueError("No data file given (use --data_file or 'data_file' in the config)")

    options = config.pca
    group_column = options.get('group_column')
    if options.get('food_groups') and not group_column:
        raise ValueError("food_groups filtering needs a group_column in the pca configuration")
    frame = DataLoader().load_food_nutrients(
        config.data_file,
        food_groups=options.get('food_groups'),
        group_column=group_column,
    )

    pca = NutrientPCA(
        columns=options.get('columns'),
        scale=options.get('scale', True),
        n_components=options.get('n_components'),
    )
    result = pca.fit(frame)

    groups = None
    scores = result.scores.copy()
    if group_column and group_column in frame.columns:
        groups = frame.loc[scores.index, group_column]
        scores.insert(0, group_column, groups)
    scores.index.name = 'row'

    tables = {
        'pca_explained_variance': result.explained_variance,
        'pca_loadings': result.loadings,
        'pca_scores': scores,
    }
    reporter = ResultsReporter()
    reporter.save_tables(tables, output_dir)
    reporter.generate_report(
        {
            'title': 'modelSelector Nutrient PCA',
            'summary': {
                'n_observations': result.n_observations,
                'n_components': len(result.components),
                'scaled': result.scaled,
            },
            'sections': {
                'Variance Explained': result.explained_variance,
                'Loadings': result.loadings,
            },
        },
        output_dir / "pca_report.html",
    )

    if plots:
        visualizer = ResultsVisualizer()
        visualizer.plot_pca_scree(result.explained_variance, output_dir / "figures" / "pca_scree.png")
        visualizer.plot_pca_biplot(result.scores, result.loadings, groups=groups,
                                   save_path=output_dir / "figures" / "pca_biplot.png")

    return {
        'result': result,
        'frame': frame,
        'output_dir': output_dir,
    }
